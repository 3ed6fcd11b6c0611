"""Unit tests for core/codec/encode.py and core/codec/decode.py"""

import json

import pytest

from blogpub.core.codec.decode import decode, decode_block, decode_blocks
from blogpub.core.codec.encode import encode, encode_block
from blogpub.core.document import Document
from blogpub.core.models import HeadingBlock, OpaqueBlock, ParagraphBlock, RawBlock, new_block
from blogpub.errors import MalformedBlock


# --- encode ---

def test_encode_shape(sample_form):
    """encode produces {"blocks": [{type, data}]} in order."""
    doc = decode(sample_form)
    assert encode(doc) == sample_form


def test_encode_keeps_block_id():
    block = new_block("paragraph", text="x")
    block.id = "abc123"
    assert encode_block(block)["id"] == "abc123"


def test_encode_omits_missing_id():
    assert "id" not in encode_block(new_block("delimiter"))


def test_encode_keeps_empty_paragraphs():
    """Empty blocks are kept in the encoded form."""
    assert len(encode(Document.new())["blocks"]) == 1


def test_encode_is_json_serializable(full_doc):
    json.dumps(encode(full_doc))


def test_encode_drop_unresolved():
    """drop_unresolved leaves out images with no url, and only those."""
    doc = Document([
        new_block("image", caption="pending"),
        new_block("image", url="a.png"),
        new_block("paragraph", text="x"),
    ])
    assert len(encode(doc)["blocks"]) == 3
    kept = encode(doc, drop_unresolved=True)["blocks"]
    assert [b["type"] for b in kept] == ["image", "paragraph"]
    assert kept[0]["data"]["url"] == "a.png"


# --- round trip ---

def test_round_trip_all_types(full_doc):
    """decode(encode(doc)) rebuilds an equal Document for every block type."""
    assert decode(encode(full_doc)) == full_doc


def test_round_trip_through_json_text(full_doc):
    """The structured form survives being stored as JSON text."""
    assert decode(json.dumps(encode(full_doc))) == full_doc


def test_round_trip_preserves_opaque_blocks():
    doc = Document([OpaqueBlock(type="chart", data={"series": [1, 2]}, id="c1")])
    form = encode(doc)
    assert form == {"blocks": [{"type": "chart", "data": {"series": [1, 2]}, "id": "c1"}]}
    assert decode(form) == doc


# --- decode_block ---

@pytest.mark.parametrize("entry", [
    "oops",
    42,
    {"data": {"text": "no type"}},
    {"type": "", "data": {}},
    {"type": "paragraph", "data": "not a dict"},
    {"type": "heading", "data": {"level": "abc"}},
    {"type": "list", "data": {"style": "diagonal"}},
])
def test_decode_block_malformed(entry):
    """Unusable entries raise MalformedBlock."""
    with pytest.raises(MalformedBlock):
        decode_block(entry, 0)


def test_decode_block_missing_data_uses_defaults():
    block = decode_block({"type": "paragraph"}, 0)
    assert isinstance(block, ParagraphBlock)
    assert block.data.text == ""


def test_decode_block_unknown_type_is_opaque():
    block = decode_block({"type": "chart", "data": {"x": 1}}, 3)
    assert isinstance(block, OpaqueBlock)
    assert block.data == {"x": 1}


def test_decode_block_header_alias():
    """Older 'header' tags decode as heading blocks."""
    block = decode_block({"type": "header", "data": {"text": "Old", "level": 3}}, 0)
    assert isinstance(block, HeadingBlock)
    assert block.data.level == 3


def test_decode_block_numeric_id():
    assert decode_block({"id": 7, "type": "delimiter"}, 0).id == "7"


# --- decode ---

def test_decode_skips_malformed_keeps_rest():
    """One bad block never loses the others."""
    doc = decode_blocks([
        {"type": "paragraph", "data": {"text": "first"}},
        "oops",
        {"type": "heading", "data": {"level": "abc"}},
        {"type": "paragraph", "data": {"text": "last"}},
    ])
    assert [b.data.text for b in doc] == ["first", "last"]


def test_decode_unknown_type_kept_in_place():
    doc = decode({"blocks": [
        {"type": "paragraph", "data": {"text": "Hi"}},
        {"type": "chart", "data": {"x": 1}},
    ]})
    assert len(doc) == 2
    assert isinstance(doc[1], OpaqueBlock)


def test_decode_image_file_url():
    """Upload-plugin image payloads resolve from file.url."""
    doc = decode({"blocks": [{"type": "image", "data": {"file": {"url": "u.png"}, "caption": "c"}}]})
    assert doc[0].data.url == "u.png"


@pytest.mark.parametrize("content", [None, "", "   ", {"blocks": []}, {"blocks": None}, []])
def test_decode_empty(content):
    assert len(decode(content)) == 0


def test_decode_bare_list():
    doc = decode([{"type": "paragraph", "data": {"text": "x"}}])
    assert doc[0].data.text == "x"


def test_decode_bytes(sample_form):
    assert decode(json.dumps(sample_form).encode("utf-8")) == decode(sample_form)


def test_decode_legacy_html_string():
    """A flat HTML body becomes a single raw block."""
    doc = decode("<p>Old <b>article</b></p>")
    assert len(doc) == 1
    assert isinstance(doc[0], RawBlock)
    assert doc[0].data.html == "<p>Old <b>article</b></p>"


def test_decode_legacy_doc_payload():
    """The legacy single-paragraph payload unwraps to its HTML."""
    legacy = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "<p>Hi</p>"}]}]}
    doc = decode(legacy)
    assert len(doc) == 1
    assert doc[0].data.html == "<p>Hi</p>"


def test_decode_invalid_json_text_treated_as_html():
    doc = decode("{not json")
    assert isinstance(doc[0], RawBlock)


@pytest.mark.parametrize("content", [42, {"foo": "bar"}, {"blocks": "nope"}])
def test_decode_unrecognized(content):
    with pytest.raises(ValueError):
        decode(content)


@pytest.mark.parametrize("level", [[1], {"n": 1}, float("inf"), float("nan"), "abc"])
def test_decode_skips_heading_with_unusable_level(level):
    """A heading whose level is not a number is dropped; the rest of the article survives."""
    doc = decode({"blocks": [
        {"type": "paragraph", "data": {"text": "kept"}},
        {"type": "heading", "data": {"level": level, "text": "x"}},
    ]})
    assert len(doc) == 1
    assert doc[0].data.text == "kept"


def test_decode_heading_level_from_json_overflow():
    """1e400 parses to infinity in JSON text and is rejected like any other bad level."""
    text = '{"blocks": [{"type": "paragraph", "data": {"text": "kept"}}, {"type": "heading", "data": {"level": 1e400}}]}'
    assert [b.type for b in decode(text)] == ["paragraph"]


@pytest.mark.parametrize("file_ref", [{"url": 5}, {"url": ["a.png"]}, {"url": ""}, "a.png"])
def test_decode_image_non_string_file_url_unresolved(file_ref):
    """Only a string file.url resolves an image."""
    doc = decode({"blocks": [{"type": "image", "data": {"file": file_ref}}]})
    assert not doc[0].data.resolved
