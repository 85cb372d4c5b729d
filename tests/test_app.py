import pytest

from swatch_studio.app import App, Palette, sample_colors
from swatch_studio.colorspace import BLACK, ColorRGBA, ColorSpaceKind
from swatch_studio.curves import EaseIn
from swatch_studio.swatch import Swatch

RED = ColorRGBA(255, 0, 0)
BLUE = ColorRGBA(0, 0, 255)


def _tagged(size: int) -> Swatch:
    """A swatch recognisable by its length."""
    return Swatch(size=size)


def _sizes(app: App) -> list[int]:
    return [sw.size for sw in app.palette.swatches]


def _assert_cache_fresh(app: App) -> None:
    assert len(app.generated_colors) == app.swatch_count()
    for sw, cached in zip(app.palette.swatches, app.generated_colors):
        assert cached == sw.generate_colors()


def _app_with(*sizes: int) -> App:
    app = App(Palette([_tagged(s) for s in sizes]))
    _assert_cache_fresh(app)
    return app


def test_new_app_has_one_cached_swatch():
    app = App()
    assert app.swatch_count() == 1
    assert app.current_swatch_index == 0
    _assert_cache_fresh(app)
    assert App(Palette([])).swatch_count() == 1


def test_last_swatch_cannot_be_removed():
    app = App()
    app.remove_swatch(0)
    assert app.swatch_count() == 1
    _assert_cache_fresh(app)


def test_add_swatch_caches_immediately():
    app = App()
    sw = Swatch.from_points(5, [(0.5, RED)], color_space=ColorSpaceKind.OKLAB)
    app.add_swatch(sw)
    assert app.swatch_count() == 2
    assert app.colors(1) == sw.generate_colors()
    _assert_cache_fresh(app)


def test_remove_clamps_selection():
    app = _app_with(3, 4, 5)
    app.select_swatch(2)
    app.remove_swatch(2)
    assert _sizes(app) == [3, 4]
    assert app.current_swatch_index == 1
    app.remove_swatch(9)
    assert _sizes(app) == [3, 4]
    _assert_cache_fresh(app)


def test_moves_keep_selected_swatch_selected():
    app = _app_with(3, 4, 5)
    app.select_swatch(1)
    app.move_swatch_up(1)
    assert _sizes(app) == [4, 3, 5]
    assert app.current_swatch().size == 4
    app.move_swatch_down(0)
    assert _sizes(app) == [3, 4, 5]
    assert app.current_swatch().size == 4
    # moving a neighbour into the selected slot moves the selection out of the way
    app.move_swatch_down(0)
    assert _sizes(app) == [4, 3, 5]
    assert app.current_swatch().size == 4
    _assert_cache_fresh(app)


def test_moves_out_of_range_are_ignored():
    app = _app_with(3, 4)
    app.move_swatch_up(0)
    app.move_swatch_down(1)
    app.move_swatch_up(7)
    assert _sizes(app) == [3, 4]


def test_duplicate_inserts_independent_copy():
    app = _app_with(3, 4)
    app.duplicate_swatch(0)
    assert _sizes(app) == [3, 3, 4]
    _assert_cache_fresh(app)
    clone = app.palette.swatches[1]
    assert clone is not app.palette.swatches[0]
    clone.set_control_point_color_by_id(0, RED)
    assert app.palette.swatches[0].control_points[0].color != RED
    app.duplicate_swatch(10)
    assert app.swatch_count() == 3


def test_swap_follows_selection():
    app = _app_with(3, 4, 5)
    app.select_swatch(0)
    app.swap_swatches(0, 2)
    assert _sizes(app) == [5, 4, 3]
    assert app.current_swatch_index == 2
    app.swap_swatches(1, 1)
    app.swap_swatches(0, 3)
    assert _sizes(app) == [5, 4, 3]
    _assert_cache_fresh(app)


def test_select_ignores_bad_index():
    app = _app_with(3, 4)
    app.select_swatch(1)
    app.select_swatch(2)
    app.select_swatch(-1)
    assert app.current_swatch_index == 1


def test_edit_current_regenerates():
    app = App()
    with app.edit_current() as sw:
        sw.add_control_point(3 / 7, RED)
        sw.color_space = ColorSpaceKind.OKLCH
    _assert_cache_fresh(app)
    assert app.colors()[3] == RED


def test_edit_current_regenerates_on_error():
    app = App()
    with pytest.raises(RuntimeError):
        with app.edit_current() as sw:
            sw.remove_control_point(0)
            raise RuntimeError("boom")
    _assert_cache_fresh(app)


def test_parameter_setters_regenerate():
    app = App()
    app.set_size(12)
    assert len(app.colors()) == 12
    app.set_size(0)
    assert len(app.colors()) == 1
    app.set_size(5)
    app.set_curve(EaseIn(3.0))
    app.set_color_space(ColorSpaceKind.OKLAB)
    assert app.current_swatch().curve == EaseIn(3.0)
    _assert_cache_fresh(app)


def test_regenerate_current_after_direct_edit():
    app = _app_with(3, 4)
    app.select_swatch(1)
    app.current_swatch().set_control_point_color_by_id(1, BLUE)
    app.regenerate_current_colors()
    assert app.colors()[-1] == BLUE
    app.palette.swatches[0].set_control_point_color_by_id(0, RED)
    app.regenerate_all_colors()
    assert app.colors(0)[0] == RED
    _assert_cache_fresh(app)


def test_pin_adds_anchor_at_slot_position():
    app = App()
    pinned = app.pin_color(3, RED)
    sw = app.current_swatch()
    assert pinned == 2
    assert len(sw.control_points) == 3
    assert sw.control_points[1].position == pytest.approx(3 / 7)
    assert app.colors()[3] == RED
    _assert_cache_fresh(app)


def test_pin_near_existing_anchor_recolors_it():
    app = App()
    assert app.pin_color(0, BLUE) == 0
    assert len(app.current_swatch().control_points) == 2
    assert app.colors()[0] == BLUE
    assert app.pin_color(8, RED) is None


def test_anchor_triples():
    app = App()
    assert app.anchors() == [
        (0, 0.0, ColorRGBA(240, 230, 220)),
        (1, 1.0, ColorRGBA(20, 20, 40)),
    ]


def test_preview_downsamples_by_nearest_index():
    app = App()
    colors = app.colors()
    assert app.preview(0) == [colors[0], colors[2], colors[5], colors[7]]
    assert app.preview(0, 10) == colors
    assert app.preview(5) == [BLACK] * 4


def test_sample_colors_edge_cases():
    assert sample_colors([], 3) == [BLACK] * 3
    assert sample_colors([RED, BLUE], 4) == [RED, BLUE]
    assert sample_colors([RED, BLACK, BLUE], 1) == [BLACK]


def test_new_palette_resets():
    app = _app_with(3, 4, 5)
    app.select_swatch(2)
    app.new_palette()
    assert app.swatch_count() == 1
    assert app.current_swatch_index == 0
    _assert_cache_fresh(app)


def test_read_access_with_bad_index_is_empty():
    app = _app_with(3, 4)
    assert app.colors(2) == []
    assert app.colors(-1) == []
    assert app.anchors(5) == []
    assert app.anchors(-1) == []
    assert app.preview(-1) == [BLACK] * 4
    assert len(app.colors(1)) == 4
