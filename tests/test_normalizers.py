from mcp_diagram_sanitizer.engine.erd import normalize_er_diagram
from mcp_diagram_sanitizer.engine.flowgraph import normalize_flow_graph
from mcp_diagram_sanitizer.engine.sequence import normalize_sequence


class TestFlowGraph:

    def test_nodes_and_edge_labels_are_quoted(self):
        out = normalize_flow_graph("graph LR\nA[User]-->|Submit|B[Server]")
        assert out.split("\n") == ["graph LR", 'A["User"]-->|"Submit"|B["Server"]']

    def test_header_remainder_becomes_body(self):
        assert normalize_flow_graph("graph TD;A[Start] --> B[End];") == 'graph TD\nA["Start"] --> B["End"]'
        assert normalize_flow_graph("graph lr A-->B") == "graph LR\nA-->B"

    def test_unknown_direction_collapses_to_td(self):
        assert normalize_flow_graph("graph BT\nA-->B") == "graph TD\nA-->B"

    def test_missing_header_defaults_to_td(self):
        assert normalize_flow_graph("A[x] --> B") == 'graph TD\nA["x"] --> B'
        assert normalize_flow_graph("") == "graph TD"

    def test_dangling_arrow_is_dropped(self):
        out = normalize_flow_graph("graph TD\nA[Start] -->\n-->\nB[End] --> C")
        assert out == 'graph TD\nA["Start"]\nB["End"] --> C'

    def test_cross_arrow_spelling_inside_words_is_kept(self):
        assert normalize_flow_graph("graph TD\nA[x] --> Fix-x") == 'graph TD\nA["x"] --> Fix-x'
        assert normalize_flow_graph("graph TD\nA[Start] --x") == 'graph TD\nA["Start"]'

    def test_semicolons_inside_labels_are_removed(self):
        assert normalize_flow_graph('graph TD\nA["x;y"] --> B') == 'graph TD\nA["xy"] --> B'

    def test_round_and_curly_nodes(self):
        out = normalize_flow_graph("graph TD\nA(Start) --> B{Is valid?}")
        assert out == 'graph TD\nA("Start") --> B{"Is valid?"}'

    def test_brackets_inside_edge_label_are_not_nodes(self):
        out = normalize_flow_graph("graph TD\nA -->|call api(x)| B")
        assert out == 'graph TD\nA -->|"call api(x)"| B'

    def test_icon_and_empty_nodes(self):
        out = normalize_flow_graph("graph TD\nU[fa:user Customer] --> S[]")
        assert out == 'graph TD\nU[fa:user "Customer"] --> S[""]'

    def test_quoted_label_with_bracket_survives(self):
        out = normalize_flow_graph('graph TD\nA["Users [admin]"] --> B')
        assert out == 'graph TD\nA["Users [admin]"] --> B'

    def test_header_is_stable_across_passes(self):
        for raw in ("graph LR;A-->B", "graph td\nA[x]", "graph\nA-->B", "graph RL A-->B"):
            once = normalize_flow_graph(raw)
            twice = normalize_flow_graph(once)
            assert once.split("\n")[0] == twice.split("\n")[0]
            assert once.split("\n")[0] in {"graph TD", "graph LR"}


class TestErDiagram:

    def test_inline_class_shorthand(self):
        assert normalize_er_diagram("USER:::styled") == "USER\nclass USER styled"

    def test_full_repair(self):
        raw = "\n".join([
            "erDiagram",
            "USER:::styled",
            "classDef styled fill:#f9f;",
            "USER ||--o{ ORDER : places",
            "ORDER { int id } LINE_ITEM { int qty }",
            "class ORDER styled;",
        ])
        assert normalize_er_diagram(raw).split("\n") == [
            "erDiagram",
            "USER",
            'USER ||--o{ ORDER : "places"',
            "ORDER { int id }",
            "LINE_ITEM { int qty }",
            "class ORDER styled",
            "classDef styled fill:#f9f",
            "class USER styled",
        ]

    def test_class_def_is_after_body_lines(self):
        out = normalize_er_diagram("erDiagram\nclassDef a fill:#fff\nA ||--|{ B : has").split("\n")
        assert out.index("classDef a fill:#fff") > out.index('A ||--|{ B : "has"')

    def test_quoted_and_non_relationship_lines_untouched(self):
        raw = 'erDiagram\nA ||--|{ B : "has"\nC {\nstring name "display: name"\n}'
        assert normalize_er_diagram(raw) == raw

    def test_fences_are_removed(self):
        assert normalize_er_diagram("```\nerDiagram\nA }|..|{ B : links\n```") == 'erDiagram\nA }|..|{ B : "links"'


class TestSequence:

    def test_orphan_deactivate_is_dropped(self):
        out = normalize_sequence("activate Bob\ndeactivate Alice\ndeactivate Bob")
        assert out == "activate Bob\ndeactivate Bob"

    def test_second_deactivate_is_dropped(self):
        out = normalize_sequence("activate A\ndeactivate A\ndeactivate A")
        assert out == "activate A\ndeactivate A"

    def test_participant_names_compare_loosely(self):
        out = normalize_sequence('activate "Bob"\ndeactivate bob')
        assert out == 'activate "Bob"\ndeactivate bob'

    def test_messages_are_quoted(self):
        raw = "sequenceDiagram\nAlice->>Bob: Hello there\nBob-->>Alice: \"Hi\"\n  A->>+B: 'go'"
        assert normalize_sequence(raw).split("\n") == [
            "sequenceDiagram",
            'Alice->>Bob: "Hello there"',
            'Bob-->>Alice: "Hi"',
            '  A->>+B: "go"',
        ]

    def test_semicolons_are_not_separators(self):
        assert normalize_sequence("A->>B: x; y") == 'A->>B: "x; y"'

    def test_other_lines_pass_through(self):
        raw = "sequenceDiagram\nparticipant A\nloop Every minute\nNote right of A: thinking\nend"
        assert normalize_sequence(raw) == raw
