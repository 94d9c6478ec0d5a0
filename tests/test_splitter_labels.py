from mcp_diagram_sanitizer.engine.labels import clean_label, escape_label, format_node_content
from mcp_diagram_sanitizer.engine.splitter import split_statements


class TestSplitStatements:

    def test_semicolon_inside_quotes_is_not_a_delimiter(self):
        assert split_statements('A;B;"x;y";C') == ["A", "B", '"x;y"', "C"]

    def test_newlines_and_blank_statements(self):
        assert split_statements("  A --> B \n\n ;; C  ") == ["A --> B", "C"]

    def test_escaped_quote_does_not_toggle(self):
        assert split_statements('A["say \\"hi;there\\""];B') == ['A["say \\"hi;there\\""]', "B"]

    def test_empty_input(self):
        assert split_statements("") == []
        assert split_statements("   \n ; ") == []

    def test_unterminated_quote_swallows_rest(self):
        assert split_statements('A["x;\nB') == ['A["x;\nB']


class TestCleanLabel:

    def test_strips_one_quote_layer_and_underscores(self):
        assert clean_label('  "__Submit__"  ') == "Submit"
        assert clean_label("'Login'") == "Login"

    def test_only_one_layer_is_removed(self):
        assert clean_label('""x""') == '\\"x\\"'

    def test_escapes_backslash_before_quote(self):
        assert clean_label('a\\b "c"') == 'a\\\\b \\"c\\"'
        assert escape_label('"') == '\\"'

    def test_blank(self):
        assert clean_label("   ") == ""
        assert clean_label('"') == '\\"'


class TestFormatNodeContent:

    def test_plain_text_is_quoted(self):
        assert format_node_content("User Action") == '"User Action"'

    def test_icon_prefix_stays_unquoted(self):
        assert format_node_content("fa:user Login") == 'fa:user "Login"'
        assert format_node_content("fa:user-circle") == "fa:user-circle"

    def test_empty(self):
        assert format_node_content("") == '""'
        assert format_node_content("   ") == '""'

    def test_already_quoted_content(self):
        assert format_node_content('"Backend Server"') == '"Backend Server"'
