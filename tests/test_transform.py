from phpbeautify.lexer import tokenize
from phpbeautify.markers import MarkerCodec
from phpbeautify.models import CodeContextRange
from phpbeautify.ranges import find_code_context_ranges
from phpbeautify.transform import disguise


def _disguise(text, codec=None):
    return disguise(tokenize(text), find_code_context_ranges(text), codec or MarkerCodec())


def test_markup_segment_becomes_html_comment():
    out = _disguise('<p><?php echo "a"; ?></p>')
    assert out == (
        "<p><!-- %pcs-comment-start#<?php echo pcs%quote#1apcs%quote#1; ?>"
        "%pcs-comment-end#--></p>"
    )


def test_script_segment_becomes_code_comment():
    out = _disguise("<script><?php echo 'x'; ?></script>")
    assert out == (
        "<script>/*%pcs-comment-start#<?php echo pcs%quote~2xpcs%quote~2; ?>"
        "%pcs-comment-end#*/</script>"
    )
    assert "<!--" not in out


def test_segments_after_script_use_markup_comments():
    out = _disguise("<script>a();</script><?= $x ?>")
    assert out.endswith("<!-- %pcs-comment-start#<?= $x ?>%pcs-comment-end#-->")


def test_wrapper_goes_before_close_tag_newline():
    out = _disguise("<?php a(); ?>\n<p>x</p>")
    assert out == "<!-- %pcs-comment-start#<?php a(); ?>%pcs-comment-end#-->\n<p>x</p>"


def test_unterminated_segment_gets_synthetic_close():
    out = _disguise("<div>x <?php echo 1")
    assert out == "<div>x <!-- %pcs-comment-start#<?php echo 1?>%pcs-comment-end#-->"


def test_unterminated_segment_in_script_uses_code_comment():
    out = _disguise("<script>var a = <?php echo 1")
    assert out.endswith("?>%pcs-comment-end#*/")


def test_end_tag_inside_code_in_script_is_escaped():
    out = _disguise('<script><?php echo "</script>"; ?>')
    assert out.startswith("<script>/*%pcs-comment-start#<?php")
    assert out.endswith("?>%pcs-comment-end#*/")
    assert "</script>" not in out
    assert "<%pcs-end-tag#/script>" in out


def test_context_is_fixed_for_the_whole_segment():
    # The segment opens inside the script and closes after its end tag.
    codec = MarkerCodec()
    text = "<script>a(<?php echo 1;"
    tokens = tokenize(text + " ?>")
    ranges = [CodeContextRange(0, len(text))]
    out = disguise(tokens, ranges, codec)
    assert out == "<script>a(/*%pcs-comment-start#<?php echo 1; ?>%pcs-comment-end#*/"


def test_markup_terminator_in_code_is_escaped():
    out = _disguise("<p><?php $a-->b; ?></p>")
    assert out.count("-->") == 1
    assert out.endswith("%pcs-comment-end#--></p>")


def test_markup_only_input_is_unchanged():
    assert _disguise("<p>a</p>") == "<p>a</p>"
    assert _disguise("") == ""
