"""Shared fixtures for core unit tests"""

import pytest

from blogpub.core.document import Document
from blogpub.core.models import new_block


SAMPLE_FORM = {
    "blocks": [
        {"type": "heading", "data": {"level": 1, "text": "Hello"}},
        {"type": "paragraph", "data": {"text": "World"}},
    ]
}


@pytest.fixture(name="sample_form")
def sample_form_fixture():
    return {"blocks": [dict(b, data=dict(b["data"])) for b in SAMPLE_FORM["blocks"]]}


@pytest.fixture(name="full_doc")
def full_doc_fixture():
    """One block of every supported type, with ids, tunes and nesting."""
    return Document([
        new_block("heading", text="Intro", level=2),
        new_block("paragraph", text="Some <b>bold</b> words."),
        new_block("paragraph", text=""),
        new_block("list", style="ordered", items=["one", {"content": "two", "items": ["two.a"]}]),
        new_block("quote", text="To be.", caption="Someone"),
        new_block("code", code="x = 1 < 2", language="python"),
        new_block("delimiter"),
        new_block("image", url="https://cdn.example/a.png", caption="A picture", alt="Alt", stretched=True),
        new_block("embed", embed="<iframe src=\"https://v.example/1\"></iframe>", caption="Video", service="vimeo"),
        new_block("raw", html="<div class=\"x\">raw</div>"),
    ])
