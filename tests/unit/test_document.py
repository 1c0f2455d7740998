"""Tests for document preparation."""

from gutenreader.reader.document import (
    normalize_newlines,
    prepare_document,
    strip_html,
    trim_boilerplate,
)


class TestStripHtml:
    """Tests for HTML reduction."""

    def test_removes_tags_and_decodes_entities(self):
        markup = "<p>Hello&nbsp;&amp; <em>welcome</em></p>"
        assert strip_html(markup) == "Hello & welcome"

    def test_drops_style_and_script_blocks(self):
        markup = (
            "<html><head><style type='text/css'>p { color: red; }</style></head>"
            "<body><p>Text</p><script>alert('x');</script></body></html>"
        )
        assert strip_html(markup) == "Text"

    def test_collapses_whitespace(self):
        markup = "<div>\n  one\n\n   two  </div>"
        assert strip_html(markup) == "one two"

    def test_tags_become_spaces(self):
        assert strip_html("<p>end.</p><p>Start</p>") == "end. Start"

    def test_angle_bracket_inside_attribute(self):
        assert strip_html('<p title="a>b">Hello</p><p>World</p>') == "Hello World"

    def test_drops_comments(self):
        markup = "<p>Hello</p><!-- note > x --><p>World</p>"
        assert strip_html(markup) == "Hello World"

    def test_heading_survives_commented_markup(self):
        markup = '<!-- <h2>CHAPTER IX</h2> --><h2 class="chap" data-note="1>0">CHAPTER I</h2><p>It began.</p>'
        assert strip_html(markup) == "CHAPTER I It began."


class TestTrimBoilerplate:
    """Tests for Project Gutenberg header and footer removal."""

    def test_trims_header_and_footer(self):
        text = (
            "The Project Gutenberg eBook of Emma\n"
            "*** START OF THE PROJECT GUTENBERG EBOOK EMMA ***\n"
            "Body text\n"
            "*** END OF THE PROJECT GUTENBERG EBOOK EMMA ***\n"
            "License terms"
        )
        assert trim_boilerplate(text) == "\nBody text\n"

    def test_older_marker_spelling(self):
        text = (
            "header\n"
            "*** START OF THIS PROJECT GUTENBERG E-BOOK EMMA ***\n"
            "Body\n"
            "*** END OF THIS PROJECT GUTENBERG E-BOOK EMMA ***\n"
        )
        assert trim_boilerplate(text).strip() == "Body"

    def test_text_without_markers_is_unchanged(self):
        text = "Just a story.\n\nWith paragraphs."
        assert trim_boilerplate(text) == text

    def test_only_start_marker(self):
        text = "header\n*** START OF THE PROJECT GUTENBERG EBOOK EMMA ***\nBody"
        assert trim_boilerplate(text) == "\nBody"


class TestPrepareDocument:
    """Tests for the full preparation pipeline."""

    def test_plain_text(self, novel):
        prepared = prepare_document(novel.as_gutenberg_file())
        assert prepared == novel.text.strip()

    def test_html_with_collapsed_markers(self):
        markup = (
            "<html><body>"
            "<p>*** START OF THE PROJECT GUTENBERG EBOOK EMMA ***</p>"
            "<h2>CHAPTER I</h2><p>Emma Woodhouse, handsome, clever, and rich.</p>"
            "<p>*** END OF THE PROJECT GUTENBERG EBOOK EMMA ***</p>"
            "<p>License</p></body></html>"
        )
        prepared = prepare_document(markup, is_html=True)
        assert prepared == "CHAPTER I Emma Woodhouse, handsome, clever, and rich."

    def test_windows_line_endings(self):
        assert prepare_document("a\r\nb\rc") == "a\nb\nc"
        assert normalize_newlines("x\r\n") == "x\n"

    def test_whitespace_only_becomes_empty(self):
        assert prepare_document("   \n\n  ") == ""
