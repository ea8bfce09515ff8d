import textwrap

from scriptkb.extract import BlockScanner, extract_code_blocks
from scriptkb.extract.scanner import InsideBlock, Outside
from scriptkb.models import ExtractedBlock


def test_filename_line_before_fence():
    blocks = extract_code_blocks("filename: out.txt\n```\nhello\nworld\n```\n")
    assert blocks == [ExtractedBlock(content="hello\nworld\n", file_name="out.txt")]


def test_comment_hint_inside_block_is_consumed():
    blocks = extract_code_blocks("```\n// filename: out.cs\nclass A {}\n```\n")
    assert len(blocks) == 1
    assert blocks[0].file_name == "out.cs"
    assert blocks[0].content == "class A {}\n"


def test_in_content_hint_overrides_pre_fence_hint():
    text = "filename: a.txt\n```\n// filename: b.txt\nbody\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name == "b.txt"
    assert block.content == "body\n"


def test_hash_comment_hint_case_insensitive():
    text = "```python\n  # FileName :  tools/run.py  \nprint('hi')\n```"
    (block,) = extract_code_blocks(text)
    assert block.file_name == "tools/run.py"
    assert block.content == "print('hi')\n"


def test_pre_fence_hint_keeps_content_intact():
    text = "Here you go, filename: a.txt\n```\nfirst line\nsecond\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name == "a.txt"
    assert block.content == "first line\nsecond\n"


def test_no_hint_leaves_name_empty():
    (block,) = extract_code_blocks("Some prose\n```js\nconsole.log(1)\n```\n")
    assert block.file_name is None
    assert block.content == "console.log(1)\n"


def test_no_fences_yields_nothing():
    assert extract_code_blocks("just text\nfilename: x.txt\n\n") == []
    assert extract_code_blocks("") == []


def test_unterminated_block_is_dropped():
    text = "```\na\n```\n```\nnever closed\n"
    blocks = extract_code_blocks(text)
    assert [b.content for b in blocks] == ["a\n"]


def test_block_count_is_half_the_fence_count():
    for fences in range(0, 8):
        text = "\n".join(["```", "x"] * fences)
        assert len(extract_code_blocks(text)) == fences // 2


def test_crlf_and_lf_are_equivalent():
    lf = "filename: w.txt\n```\none\ntwo\n```\n"
    crlf = lf.replace("\n", "\r\n")
    mixed = "filename: w.txt\r\n```\none\ntwo\r\n```\n"
    assert extract_code_blocks(lf) == extract_code_blocks(crlf) == extract_code_blocks(mixed)
    assert extract_code_blocks(crlf)[0].content == "one\ntwo\n"


def test_content_preserves_blank_and_indented_lines():
    text = "```\n\n    indented\n\t\n```"
    (block,) = extract_code_blocks(text)
    assert block.content == "\n    indented\n\t\n"


def test_indented_fences_still_delimit():
    text = "1. Run:\n    ```sh\n    make\n    ```\n"
    (block,) = extract_code_blocks(text)
    assert block.content == "    make\n"


def test_empty_block():
    (block,) = extract_code_blocks("```\n```\n")
    assert block.content == ""
    assert block.file_name is None


def test_three_blocks_in_document_order():
    text = textwrap.dedent(
        """\
        filename: one.py
        ```python
        print(1)
        ```
        Some words in between.
        ```
        # filename: two.sh
        echo 2
        ```
        More words.
        ```
        three
        ```
        """
    )
    blocks = extract_code_blocks(text)
    assert [b.file_name for b in blocks] == ["one.py", "two.sh", None]
    assert [b.content for b in blocks] == ["print(1)\n", "echo 2\n", "three\n"]


def test_lines_inside_a_block_are_not_hint_sources():
    text = "```\nfilename: inner.txt\n```\n```\nnext\n```\n"
    blocks = extract_code_blocks(text)
    # The first block keeps its line: only comment-style hints are consumed.
    assert blocks[0].content == "filename: inner.txt\n"
    assert blocks[1].file_name is None


def test_blank_lines_do_not_reset_the_hint():
    text = "filename: keep.txt\n\n   \n\t\n```\nx\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name == "keep.txt"


def test_latest_non_blank_line_wins():
    text = "filename: old.txt\nnot a hint\n```\nx\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name is None


def test_pre_fence_line_survives_an_adjacent_block():
    text = "filename: a.txt\n```\nx\n```\n```\ny\n```\n"
    blocks = extract_code_blocks(text)
    assert [b.file_name for b in blocks] == ["a.txt", "a.txt"]


def test_malformed_hints_are_ignored():
    text = "filename:\n```\n//filename:\nbody\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name is None
    assert block.content == "//filename:\nbody\n"


def test_comment_hint_only_on_first_line():
    text = "```\nbody\n// filename: late.txt\n```\n"
    (block,) = extract_code_blocks(text)
    assert block.file_name is None
    assert block.content == "body\n// filename: late.txt\n"


def test_scanner_states_and_step_results():
    scanner = BlockScanner()
    assert isinstance(scanner.state, Outside)
    assert scanner.step("filename: s.txt") is None
    assert scanner.state == Outside("filename: s.txt")
    assert scanner.step("```") is None
    assert isinstance(scanner.state, InsideBlock)
    assert scanner.state.file_name == "s.txt"
    scanner.step("data")
    closed = scanner.step("```")
    assert closed == ExtractedBlock(content="data\n", file_name="s.txt")
    assert isinstance(scanner.state, Outside)
    assert scanner.blocks == [closed]


def test_scan_resets_between_calls():
    scanner = BlockScanner()
    scanner.scan("```\nopen")
    assert scanner.scan("```\nx\n```") == [ExtractedBlock(content="x\n")]


def test_blocks_are_immutable():
    (block,) = extract_code_blocks("```\nx\n```")
    try:
        block.content = "y"  # type: ignore[misc]
    except AttributeError:
        pass
    else:
        raise AssertionError("ExtractedBlock should be frozen")
