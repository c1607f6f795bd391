"""Tests for canvas compositing."""

from tui_styling.core.result import CompositionFailure, Err, InvalidColor, InvalidGeometry
from tui_styling.core.style import StyleProperties
from tui_styling.layout.canvas import (
    Canvas,
    CanvasRenderOptions,
    Position,
    create_layer,
    create_modal,
    create_overlay,
    place,
    render_canvas,
)
from tui_styling.render.codes import RenderOptions
from tui_styling.render.metrics import strip


class TestRenderCanvas:
    """Tests for render_canvas."""

    def test_spaces_are_transparent(self) -> None:
        layers = [create_layer("base", "XYZ"), create_layer("top", "A B", z_index=1)]
        assert render_canvas(layers, 3, 1).unwrap().content == "AYB"

    def test_sorted_by_z_index(self) -> None:
        layers = [create_layer("top", "A B", z_index=1), create_layer("base", "XYZ")]
        result = render_canvas(layers, 3, 1).unwrap()
        assert result.content == "AYB"
        assert [layer.id for layer in result.layers] == ["base", "top"]

    def test_ties_keep_insertion_order(self) -> None:
        layers = [create_layer("first", "A"), create_layer("second", "B")]
        assert render_canvas(layers, 1, 1).unwrap().content == "B"

    def test_empty_surface(self) -> None:
        result = render_canvas([], 3, 2).unwrap()
        assert result.content == "   \n   "
        assert (result.width, result.height) == (3, 2)

    def test_clips_out_of_bounds(self) -> None:
        assert render_canvas([create_layer("a", "abcdef", x=2)], 4, 1).unwrap().content == "  ab"
        assert render_canvas([create_layer("a", "abcd", x=-2)], 4, 1).unwrap().content == "cd  "
        assert render_canvas([create_layer("a", "a\nb", y=1)], 1, 2).unwrap().content == " \na"

    def test_wide_glyph_takes_two_cells(self) -> None:
        assert render_canvas([create_layer("a", "世")], 3, 1).unwrap().content == "世 "

    def test_half_overwritten_wide_glyph(self) -> None:
        layers = [create_layer("base", "世界"), create_layer("top", "x", x=1, z_index=1)]
        assert render_canvas(layers, 4, 1).unwrap().content == " x界"

    def test_wide_glyph_at_right_edge_clipped(self) -> None:
        assert render_canvas([create_layer("a", "a世")], 2, 1).unwrap().content == "a "

    def test_tab_renders_as_space(self) -> None:
        result = render_canvas([create_layer("a", "a\tb")], 5, 1).unwrap()
        assert result.content == "a b  "

    def test_hidden_layers(self) -> None:
        layers = [
            create_layer("a", "a", visible=False),
            create_layer("b", "b", x=1, opacity=0.0),
        ]
        result = render_canvas(layers, 2, 1).unwrap()
        assert result.content == "  "
        assert [layer.id for layer in result.layers] == ["b"]

    def test_partial_opacity_is_faint(self) -> None:
        result = render_canvas([create_layer("a", "a", opacity=0.5)], 2, 1).unwrap()
        assert result.content == "\x1b[2ma\x1b[0m "

    def test_styled_layer(self, canvas_true_color: CanvasRenderOptions) -> None:
        layer = create_layer("a", "ab", style=StyleProperties(bold=True))
        result = render_canvas([layer], 3, 1, canvas_true_color).unwrap()
        assert result.content == "\x1b[1mab\x1b[0m "

    def test_styles_do_not_bleed_between_rows(self, canvas_true_color: CanvasRenderOptions) -> None:
        layer = create_layer("a", "a\nb", style=StyleProperties(foreground="red"))
        result = render_canvas([layer], 1, 2, canvas_true_color).unwrap()
        assert result.content == "\x1b[31ma\x1b[0m\n\x1b[31mb\x1b[0m"

    def test_background(self, true_color: RenderOptions) -> None:
        options = CanvasRenderOptions(background="blue", render_options=true_color)
        result = render_canvas([create_layer("a", "x")], 2, 1, options).unwrap()
        assert result.content == "\x1b[44mx \x1b[0m"

    def test_byte_length(self, canvas_true_color: CanvasRenderOptions) -> None:
        layer = create_layer("a", "世", style=StyleProperties(bold=True))
        result = render_canvas([layer], 4, 1, canvas_true_color).unwrap()
        assert result.byte_length == len(result.content.encode("utf-8"))

    def test_duplicate_ids(self) -> None:
        result = render_canvas([create_layer("a", "x"), create_layer("a", "y")], 2, 1)
        assert isinstance(result, Err)
        assert isinstance(result.error, CompositionFailure)

    def test_negative_size(self) -> None:
        result = render_canvas([], -1, 2)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidGeometry)

    def test_first_error_aborts(self, canvas_true_color: CanvasRenderOptions) -> None:
        layers = [
            create_layer("ok", "fine"),
            create_layer("bad", "x", style=StyleProperties(background="nope")),
        ]
        result = render_canvas(layers, 4, 1, canvas_true_color)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidColor)


class TestFactories:
    """Tests for layer factories and place."""

    def test_overlay(self) -> None:
        overlay = create_overlay("hi", x=2, y=1)
        assert overlay.z_index == 1000
        assert overlay.position == Position(2, 1)

    def test_default_overlay_ids_are_distinct(self) -> None:
        first = create_overlay("a")
        second = create_overlay("b", x=1)
        assert first.id != second.id
        assert first.id == create_overlay("a").id
        assert render_canvas([first, second], 2, 1).unwrap().content == "ab"

    def test_overlay_explicit_id(self) -> None:
        assert create_overlay("hi", id="tooltip").id == "tooltip"

    def test_modal_is_centered_over_backdrop(self) -> None:
        backdrop, modal = create_modal("hi", 10, 5)
        assert modal.position == Position(4, 2)
        assert modal.z_index == 2000
        assert backdrop.z_index == 1500
        assert backdrop.id == "modal-backdrop"

        rows = strip(render_canvas([backdrop, modal], 10, 5).unwrap().content).split("\n")
        assert rows[0] == "░" * 10
        assert rows[2] == "░░░░hi░░░░"

    def test_modal_larger_than_canvas(self) -> None:
        _, modal = create_modal("a very long line", 4, 1)
        assert modal.position == Position(0, 0)

    def test_place(self) -> None:
        assert place("ab", Position(1, 1), 4, 3).unwrap() == "    \n ab \n    "

    def test_place_negative_size(self) -> None:
        assert isinstance(place("ab", Position(0, 0), -1, 1), Err)


class TestCanvas:
    """Tests for the immutable Canvas value."""

    def test_with_layer_returns_new_canvas(self) -> None:
        empty = Canvas(3, 1)
        canvas = empty.with_layer(create_layer("a", "abc"))
        assert empty.layers == ()
        assert canvas.render().unwrap().content == "abc"

    def test_with_layer_replaces_same_id(self) -> None:
        canvas = Canvas(3, 1).with_layer(create_layer("a", "abc")).with_layer(create_layer("a", "xyz"))
        assert len(canvas.layers) == 1
        assert canvas.get_layer("a").content == "xyz"

    def test_without_layer(self) -> None:
        canvas = Canvas(3, 1).with_layer(create_layer("a", "abc")).without_layer("a")
        assert canvas.render().unwrap().content == "   "

    def test_background(self, true_color: RenderOptions) -> None:
        canvas = Canvas(1, 1, background="red")
        assert canvas.render(true_color).unwrap().content == "\x1b[41m \x1b[0m"
