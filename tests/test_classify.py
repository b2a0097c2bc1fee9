"""Tests for codestream.classify."""

import pytest

from codestream.classify import MessageKind, ProcessedMessage, classify


def test_pure_code_message():
    result = classify("```js\nconsole.log(1)\n```")
    assert result.kind is MessageKind.CODE
    assert result.text == "console.log(1)"
    assert result.is_code
    assert result.language == "js"
    assert len(result.blocks) == 1


def test_pure_code_with_surrounding_whitespace():
    result = classify("\n\n  ```py\nprint(1)\n```  \n")
    assert result.kind is MessageKind.CODE
    assert result.text == "print(1)"


def test_mixed_content_keeps_original_text():
    text = "Here:\n```js\nx=1\n```\nDone"
    result = classify(text)
    assert result.kind is MessageKind.TEXT
    assert result.text == text
    assert len(result.blocks) == 1
    block = result.blocks[0]
    assert block.language == "js"
    assert block.content == "x=1"
    assert text[block.start_offset:block.end_offset] == "```js\nx=1\n```"


def test_two_blocks_is_text():
    text = "```py\na\n```\n```py\nb\n```"
    result = classify(text)
    assert result.kind is MessageKind.TEXT
    assert [b.content for b in result.blocks] == ["a", "b"]


@pytest.mark.parametrize("text", [
    "",
    "just some prose",
    "inline `code` only",
    "``py\nnot quite\n``",
])
def test_no_fence_is_plain_text(text):
    result = classify(text)
    assert result == ProcessedMessage(text=text, kind=MessageKind.TEXT, blocks=())
    assert result.language == ""


def test_unterminated_fence_is_text():
    text = "```py\nprint(1)"
    result = classify(text)
    assert result.kind is MessageKind.TEXT
    assert result.blocks == ()
    assert result.text == text


def test_rust_language_extracted():
    result = classify("```rust\nfn main(){}\n```")
    assert result.language == "rust"


def test_untagged_language_is_text():
    result = classify("```\nhello\n```")
    assert result.language == "text"
    assert result.text == "hello"


def test_idempotent():
    text = "Intro\n```sh\nls\n```\nOutro"
    assert classify(text) == classify(text)


def test_result_is_immutable():
    result = classify("hello")
    with pytest.raises(AttributeError):
        result.text = "other"
