from phpbeautify.lexer import tokenize
from phpbeautify.models import CodeContextRange
from phpbeautify.ranges import find_code_context_ranges, in_code_context


def test_script_range_spans_start_tag_to_end_tag():
    text = "<script>var a;</script>"
    assert find_code_context_ranges(text) == [CodeContextRange(0, 14)]


def test_style_and_script_ranges_in_order():
    text = "<style>p{}</style><p>x</p><script></script>"
    ranges = find_code_context_ranges(text)
    assert [(r.start, r.end) for r in ranges] == [(0, 10), (26, 34)]


def test_uppercase_tags_are_recognised():
    assert find_code_context_ranges("<STYLE>x</STYLE>") == [CodeContextRange(0, 8)]


def test_offsets_across_lines():
    text = "<p>\n<script>\nx\n</script>"
    assert find_code_context_ranges(text) == [CodeContextRange(4, 15)]


def test_unclosed_element_is_open_ended():
    ranges = find_code_context_ranges("<p>a</p><script>var a;")
    assert len(ranges) == 1
    assert ranges[0].start == 8
    assert ranges[0].open_ended
    assert ranges[0].contains(10 ** 6)


def test_other_elements_are_ignored():
    assert find_code_context_ranges("<div><p>x</p></div>") == []


def test_custom_element_list():
    ranges = find_code_context_ranges("<textarea>a</textarea>", elements=("textarea",))
    assert ranges == [CodeContextRange(0, 11)]


def test_in_code_context_is_half_open():
    ranges = [CodeContextRange(5, 10), CodeContextRange(20)]
    assert not in_code_context(ranges, 4)
    assert in_code_context(ranges, 5)
    assert in_code_context(ranges, 9)
    assert not in_code_context(ranges, 10)
    assert not in_code_context(ranges, 19)
    assert in_code_context(ranges, 20)
    assert in_code_context(ranges, 500)
    assert not in_code_context([], 0)


def test_tags_inside_code_segments_do_not_open_ranges():
    text = '<?php echo "<b><script>"; ?>\n<div><?php $s = "a ?>   b"; ?></div>'
    assert find_code_context_ranges(text) == []


def test_real_script_after_code_mentioning_one():
    text = '<?php echo "<script>"; ?><script>x</script>'
    assert find_code_context_ranges(text) == [CodeContextRange(25, 34)]


def test_end_tag_inside_code_does_not_close_range():
    text = '<script><?php echo "</script>"; ?>var a;</script>'
    assert find_code_context_ranges(text) == [CodeContextRange(0, 40)]


def test_offsets_survive_multiline_code():
    text = "<?php\n$a = '<style>';\n?>\n<p>\n<script>x</script>"
    ranges = find_code_context_ranges(text)
    assert len(ranges) == 1
    assert text[ranges[0].start:].startswith("<script>")
    assert text[ranges[0].end:] == "</script>"


def test_given_tokens_are_used():
    text = "<? echo '<script>'; ?><p>x</p>"
    assert find_code_context_ranges(text, tokens=tokenize(text, short_tags=True)) == []
