"""Unit tests for the Graphviz DOT renderer."""

from refviz.config import Direction
from refviz.graph.graphviz import GraphvizRenderer, RenderCache, quote_dot, quote_html
from refviz.graph.models import ArrayNode, FieldEntry, ObjectNode
from refviz.styling import StylingPolicy


class Thing:
    pass


class TestQuoting:
    """Test escaping helpers."""

    def test_quote_html(self):
        assert quote_html("<a & 'b' \"c\">") == "&lt;a &amp; &#x27;b&#x27; &quot;c&quot;&gt;"

    def test_quote_html_plain_text_unchanged(self):
        assert quote_html("Albert") == "Albert"

    def test_quote_dot(self):
        assert quote_dot('say "hi" \\ bye') == 'say \\"hi\\" \\\\ bye'


class TestRenderCache:
    """Test node naming."""

    def test_names_assigned_in_request_order(self):
        cache = RenderCache()
        a, b = Thing(), Thing()

        assert cache.name_of(b) == "n1"
        assert cache.name_of(a) == "n2"
        assert cache.name_of(b) == "n1"

    def test_null_name(self):
        cache = RenderCache()
        assert cache.name_of(None) == "NULL"
        assert len(cache.names) == 0

    def test_reset(self):
        cache = RenderCache()
        thing = Thing()
        cache.name_of(thing)
        cache.null_drawn = True

        cache.reset()

        assert thing not in cache
        assert None not in cache
        assert cache.name_of(Thing()) == "n1"


class TestGraphvizRenderer:
    """Test DOT fragments emitted per callback."""

    def test_header_and_footer(self):
        renderer = GraphvizRenderer(direction=Direction.LR)
        renderer.diagram_begin()

        assert renderer.diagram_end() == (
            "digraph Python {\n"
            '\trankdir="LR";\n'
            "\tnode[shape=plaintext]\n"
            "}\n"
        )

    def test_diagram_begin_clears_previous_output(self):
        renderer = GraphvizRenderer()
        renderer.diagram_begin()
        renderer.visit_null()
        renderer.diagram_end()

        renderer.diagram_begin()
        assert "NULL" not in renderer.diagram_end()

    def test_null_drawn_once(self):
        renderer = GraphvizRenderer()
        renderer.diagram_begin()
        renderer.visit_null()
        renderer.visit_null()
        text = renderer.diagram_end()

        assert text.count('\tNULL[label="null", shape=plaintext];\n') == 1

    def test_object_with_primitive_fields(self):
        renderer = GraphvizRenderer()
        thing = Thing()
        node = ObjectNode(thing, "Thing", [FieldEntry("x", "1"), FieldEntry("y", "-2")])

        renderer.diagram_begin()
        renderer.visit_object_begin(node)
        for entry in node.primitive_fields:
            renderer.visit_object_primitive_field(entry.name, entry.value)
        renderer.visit_object_end(thing)
        text = renderer.diagram_end()

        assert text == (
            "digraph Python {\n"
            '\trankdir="TB";\n'
            "\tnode[shape=plaintext]\n"
            "\tn1[label=<\n"
            "\t\t<table border='0' cellborder='1' cellspacing='0'>\n"
            "\t\t\t<tr>\n"
            "\t\t\t\t<td rowspan='3'>Thing</td>\n"
            "\t\t\t</tr>\n"
            "\t\t\t<tr>\n"
            "\t\t\t\t<td>x: 1</td>\n"
            "\t\t\t</tr>\n"
            "\t\t\t<tr>\n"
            "\t\t\t\t<td>y: -2</td>\n"
            "\t\t\t</tr>\n"
            "\t\t</table>\n"
            "\t>];\n"
            "}\n"
        )

    def test_object_without_primitive_fields_has_plain_header(self):
        renderer = GraphvizRenderer()
        thing = Thing()
        renderer.diagram_begin()
        renderer.visit_object_begin(ObjectNode(thing, "Thing"))
        renderer.visit_object_end(thing)

        assert "\t\t\t\t<td>Thing</td>\n" in renderer.diagram_end()

    def test_field_names_hidden(self):
        renderer = GraphvizRenderer(show_field_names_in_labels=False)
        renderer.diagram_begin()
        renderer.visit_object_primitive_field("name", "<A>")

        assert "\t\t\t\t<td>&lt;A&gt;</td>\n" in renderer.diagram_end()

    def test_primitive_array(self):
        renderer = GraphvizRenderer()
        values = [1, 2]
        node = ArrayNode(values, "list", True, ["1", "2"])

        renderer.diagram_begin()
        renderer.visit_array_begin(node)
        for index, element in enumerate(node.elements):
            renderer.visit_array_element(node, element, index)
        renderer.visit_array_end(values)
        text = renderer.diagram_end()

        assert (
            "\tn1[label=<\n"
            "\t\t<table border='0' cellborder='1' cellspacing='0'>\n"
            "\t\t\t<tr>\n"
            "\t\t\t\t<td>list</td>\n"
            "\t\t\t\t<td>1</td>\n"
            "\t\t\t\t<td>2</td>\n"
            "\t\t\t</tr>\n"
            "\t\t</table>\n"
            "\t>];\n"
        ) in text

    def test_reference_array_uses_ports_and_padding(self):
        renderer = GraphvizRenderer()
        child = Thing()
        values = [child]
        node = ArrayNode(values, "list", False, [child])

        renderer.diagram_begin()
        renderer.visit_array_begin(node)
        renderer.visit_array_element(node, "", 0)
        renderer.visit_array_end(values)
        renderer.visit_array_element_edge(values, 0, child)
        text = renderer.diagram_end()

        assert "cellpadding='9'" in text
        assert '\t\t\t\t<td port="f0"></td>\n' in text
        assert '\tn1:f0 -> n2[label="0",fontsize=12];\n' in text

    def test_field_edge_with_attributes(self):
        renderer = GraphvizRenderer()
        parent, child = Thing(), Thing()
        renderer.diagram_begin()
        renderer.visit_object_field_edge(parent, FieldEntry("left", child, "color=red,fontcolor=red"))
        renderer.visit_object_field_edge(parent, FieldEntry('say "hi"', None))
        text = renderer.diagram_end()

        assert '\tn1 -> n2[label="left",fontsize=12,color=red,fontcolor=red];\n' in text
        assert '\tn1 -> NULL[label="say \\"hi\\"",fontsize=12];\n' in text

    def test_object_attributes_appended(self):
        styling = StylingPolicy()
        styling.class_attributes.add(Thing, "color=pink,style=filled")
        renderer = GraphvizRenderer(styling=styling)
        thing = Thing()

        renderer.diagram_begin()
        renderer.visit_object_begin(ObjectNode(thing, "Thing"))
        renderer.visit_object_end(thing)

        assert "\t>,color=pink,style=filled];\n" in renderer.diagram_end()

    def test_shared_cache_keeps_names_between_renderers(self):
        cache = RenderCache()
        thing = Thing()
        other = Thing()

        first = GraphvizRenderer(cache=cache)
        first.diagram_begin()
        first.visit_null()
        first.visit_object_begin(ObjectNode(thing, "Thing"))
        first.visit_object_end(thing)
        first.diagram_end()

        second = GraphvizRenderer(cache=cache)
        second.diagram_begin()
        second.visit_null()
        second.visit_object_begin(ObjectNode(other, "Thing"))
        second.visit_object_end(other)
        text = second.diagram_end()

        assert second.already_visualized(thing)
        assert "\tn2[label=<\n" in text
        assert "NULL[" not in text
