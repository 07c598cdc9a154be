import pytest

from phpbeautify import beautify, is_whole_code_block
from phpbeautify.markers import MarkerCodec
from phpbeautify.options import HtmlFormatOptions


# ---------------- fast path ----------------

def test_single_code_block_is_returned_unchanged():
    assert beautify("<?php echo 1; ?>") == "<?php echo 1; ?>"


def test_single_code_block_loses_leading_whitespace_only():
    assert beautify("   <?php echo 1; ?>") == "<?php echo 1; ?>"
    assert beautify("\n\t<?php\n  echo 1;\n?>\n") == "<?php\n  echo 1;\n?>\n"


def test_single_code_block_without_close_tag(identity_formatter):
    text = "<?php\nfunction a() {\n    return 1;\n}\n"
    assert beautify(text, formatter=identity_formatter) == text
    identity_formatter.assert_not_called()


def test_is_whole_code_block_rules():
    assert is_whole_code_block("<?php echo 1; ?>")
    assert is_whole_code_block("<?php echo 1; ?>\n")
    assert is_whole_code_block("<?php echo 1; ?>\r\n")
    assert is_whole_code_block("<?= $x ?>")
    assert is_whole_code_block("  <?PHP echo 1;")
    assert not is_whole_code_block("<?php a(); ?>text<?php b(); ?>")
    assert not is_whole_code_block("<?php a(); ?><p>trailing markup</p>")
    assert not is_whole_code_block("<div>x <?php echo 1")
    assert not is_whole_code_block("<p>no code</p>")
    assert not is_whole_code_block("")


def test_multiple_blocks_take_the_full_path(identity_formatter):
    text = "<?php a(); ?>text<?php b(); ?>"
    assert beautify(text, formatter=identity_formatter) == text
    identity_formatter.assert_called_once()


# ---------------- full path ----------------

def test_code_in_script_is_disguised_as_code_comment(identity_formatter):
    beautify("<script><?php echo 'x'; ?></script>", formatter=identity_formatter)
    disguised = identity_formatter.call_args[0][0]
    assert "/*%pcs-comment-start#<?php" in disguised
    assert "%pcs-comment-end#*/" in disguised
    assert "<!--" not in disguised


def test_formatter_receives_translated_options(identity_formatter):
    beautify("<p><?= $x ?></p>", {"tabSize": 2, "wrapLineLength": 80}, formatter=identity_formatter)
    options = identity_formatter.call_args[0][1]
    assert isinstance(options, HtmlFormatOptions)
    assert options.indent_unit == "  "
    assert options.wrap_line_length == 80


def test_ready_options_are_passed_through(identity_formatter):
    opts = HtmlFormatOptions(indent_size=3)
    beautify("<p><?= $x ?></p>", opts, formatter=identity_formatter)
    assert identity_formatter.call_args[0][1] is opts


def test_unterminated_segment_is_balanced_and_clean():
    out = beautify("<div>x <?php echo 1")
    assert out == "<div>x <?php echo 1?>"


def test_markup_is_indented_around_code():
    out = beautify("<div><p><?= $name ?></p></div>")
    assert out == "<div>\n    <p><?= $name ?></p>\n</div>"


def test_tabs_when_insert_spaces_is_off():
    out = beautify("<div><p><?= $name ?></p></div>", {"insertSpaces": False})
    assert out == "<div>\n\t<p><?= $name ?></p>\n</div>"


def test_code_layout_is_preserved():
    text = "<ul>\n<?php foreach ($items as $i):\n        if ($i) { ?>\n<li><?= $i ?></li>\n<?php } endforeach; ?>\n</ul>"
    out = beautify(text)
    assert "<?php foreach ($items as $i):\n        if ($i) { ?>" in out
    assert "<?php } endforeach; ?>" in out
    assert "<li><?= $i ?></li>" in out


def test_quotes_and_terminators_in_attributes_survive():
    text = "<a href=\"<?php echo url('a', \"b\"); ?>\" title='<?= $t ?>'>x</a><!-- <?php $a-->b; ?> -->"
    out = beautify(text)
    assert "url('a', \"b\")" in out
    assert "<?php $a-->b; ?>" in out


@pytest.mark.parametrize("text", [
    "<div><?php echo \"a\"; ?></div>",
    "<script>var a = '<?php echo 'x'; ?>';</script>",
    "<style>p { color: <?= $c ?>; }</style>",
    "<div>x <?php echo 1",
    "<?php a(); ?>\n<?php b(); ?>",
    "<p title=\"<?= $t ?>\">a</p>\n\n<p>b</p>",
])
def test_no_sentinel_leaks_into_output(text):
    out = beautify(text, {"preserveNewlines": True})
    for sentinel in MarkerCodec().sentinels():
        assert sentinel not in out
    assert "%pcs" not in out
    assert "pcs%" not in out


def test_input_containing_sentinel_fragments_is_preserved():
    out = beautify("<p>100%pcs-comment-end#--></p><?php echo \"x\"; ?>")
    assert "100%pcs-comment-end#-->" in out
    assert "<?php echo \"x\"; ?>" in out


@pytest.mark.parametrize("text", [
    "<ul>\n<li><?= $a ?></li>\n<li><?php echo \"b\"; ?></li>\n</ul>",
    "<div class=\"a\"><span><?= $x ?></span> text <b>bold</b></div>",
    "<html><head><title><?= $t ?></title></head><body><p>x</p></body></html>",
])
def test_second_pass_is_a_fixed_point(text):
    once = beautify(text)
    assert beautify(once) == once


def test_formatter_errors_propagate():
    def broken(text, options):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        beautify("<p><?= $x ?></p>", formatter=broken)


# ---------------- code segments next to tag-like text ----------------

def test_end_tag_in_php_string_inside_script_is_untouched():
    text = '<div><script><?php echo "</script>";   $a  =  1; ?></script></div>'
    out = beautify(text)
    assert out == '<div>\n    <script><?php echo "</script>";   $a  =  1; ?></script>\n</div>'


def test_tags_in_php_strings_do_not_change_later_segments(identity_formatter):
    text = '<?php echo "<b><script>"; ?>\n<div><?php $s = "a ?>   b"; ?></div>'
    assert beautify(text) == text
    beautify(text, formatter=identity_formatter)
    assert "/*%pcs" not in identity_formatter.call_args[0][0]


def test_close_tag_in_string_is_counted_by_fast_path_check():
    assert not is_whole_code_block('<?php $a = "?>"; ?>')
