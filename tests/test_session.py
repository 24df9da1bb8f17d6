"""Tests for the map session controller."""

import pytest

from tests.helpers import ScriptedLookup
from wagemap.config.models import MapConfig
from wagemap.lookup.exceptions import WageDataUnavailableError
from wagemap.rendering.models import RenderedFeature
from wagemap.session.controller import MapSession
from wagemap.session.models import LoadState

LAYER = ("counties-fill", "fill-color")
GRAY = "#e2e8f0"


@pytest.fixture
def session(directory, static_lookup, renderer):
    return MapSession(directory, static_lookup, renderer)


class TestRepaint:
    """Tests for paint-property updates."""

    def test_nothing_painted_before_selection(self, session, renderer):
        assert session.paint_rule is None
        assert renderer.paint_calls == []
        assert session.load_state == LoadState.IDLE

    def test_selecting_job_category_paints_once(self, session, renderer):
        snapshot = session.select_job_category("15-1252")

        assert snapshot.soc_code == "15-1252"
        assert session.load_state == LoadState.READY
        assert len(renderer.paint_calls) == 1
        layer_id, name, expression = renderer.paint_calls[0]
        assert (layer_id, name) == LAYER
        assert expression is session.paint_rule.expression
        assert session.paint_rule.colored_areas == 8

    def test_salary_change_paints_once(self, session, renderer):
        session.select_job_category("15-1252")

        rule = session.set_salary(200000)

        assert session.salary == 200000
        assert len(renderer.paint_calls) == 2
        assert renderer.paint_value(*LAYER) == rule.expression
        assert rule.nested_names == 0

    def test_unchanged_salary_does_not_repaint(self, session, renderer):
        session.select_job_category("15-1252")

        session.set_salary(120000)
        session.repaint()

        assert len(renderer.paint_calls) == 1

    def test_negative_salary_rejected(self, session):
        with pytest.raises(ValueError, match="non-negative"):
            session.set_salary(-1)

    def test_salary_before_selection_paints_no_data(self, session, renderer):
        rule = session.set_salary(90000)

        assert rule.expression == GRAY
        assert renderer.paint_value(*LAYER) == GRAY

    def test_switching_job_category_repaints(self, session, renderer):
        session.select_job_category("15-1252")
        session.select_job_category("29-1141")

        assert len(renderer.paint_calls) == 2
        assert session.paint_rule.colored_areas == 2

    @pytest.mark.parametrize("soc_code", [None, "", "   "])
    def test_deselect_paints_no_data(self, session, renderer, soc_code):
        session.select_job_category("15-1252")

        snapshot = session.select_job_category(soc_code)

        assert not snapshot.has_data
        assert session.load_state == LoadState.IDLE
        assert renderer.paint_value(*LAYER) == GRAY

    def test_failed_load_paints_no_data(self, directory, renderer):
        lookup = ScriptedLookup({"15-1252": WageDataUnavailableError("service down")})
        session = MapSession(directory, lookup, renderer)

        session.select_job_category("15-1252")

        assert session.load_state == LoadState.ERROR
        assert renderer.paint_value(*LAYER) == GRAY

    def test_pending_fetch_keeps_current_colors(self, session, renderer):
        session.select_job_category("15-1252")
        painted = renderer.paint_value(*LAYER)

        session.loader.begin("29-1141")

        assert session.load_state == LoadState.LOADING
        assert len(renderer.paint_calls) == 1
        assert renderer.paint_value(*LAYER) is painted

    def test_custom_layer(self, directory, static_lookup, renderer):
        config = MapConfig(layer_id="wage-layer", fill_property="fill-extrusion-color", name_property="county")
        session = MapSession(directory, static_lookup, renderer, map_config=config)

        session.select_job_category("15-1252")

        expression = renderer.paint_value("wage-layer", "fill-extrusion-color")
        assert expression[:2] == ["match", ["get", "county"]]

    def test_display_name_overrides_from_config(self, directory, static_lookup, renderer):
        config = MapConfig(display_name_overrides={"McLean County": "MCLEAN"})
        session = MapSession(directory, static_lookup, renderer, map_config=config)

        session.select_job_category("15-1252")

        assert "MCLEAN" in session.paint_rule.expression


class TestWageSetChanges:
    """Tests for the displayed selection when the wage set is replaced."""

    @pytest.mark.parametrize("soc_code", [None, ""])
    def test_deselect_clears_clicked_county(self, session, renderer, soc_code):
        session.select_job_category("15-1252")
        session.click(RenderedFeature("21111", "Jefferson", "21"))

        session.select_job_category(soc_code)

        assert session.effective_selection.wage is None
        assert session.effective_selection.is_empty
        assert renderer.highlighted("selected") == []

    def test_switch_reresolves_clicked_county(self, session, renderer):
        session.select_job_category("15-1252")
        session.click(RenderedFeature("06059", "Orange", "06"))

        session.select_job_category("29-1141")

        wage = session.effective_selection.wage
        assert wage.area_code == 12345
        assert wage.tier1 == 30.0
        assert renderer.highlighted("selected") == ["06059"]

    def test_switch_clears_county_missing_from_new_set(self, session, renderer):
        session.select_job_category("15-1252")
        session.click(RenderedFeature("21111", "Jefferson", "21"))

        session.select_job_category("29-1141")

        assert session.effective_selection.is_empty
        assert renderer.highlighted("selected") == []

    def test_switch_reresolves_hovered_county(self, session):
        session.select_job_category("15-1252")
        session.hover(RenderedFeature("06059", "Orange", "06"))

        session.select_job_category("29-1141")

        assert session.effective_selection.wage.tier1 == 30.0

    def test_failed_load_clears_clicked_county(self, directory, static_lookup, renderer):
        rows = [wage.model_dump(by_alias=True) for wage in static_lookup.fetch_wages("15-1252")]
        lookup = ScriptedLookup(
            {
                "15-1252": rows,
                "29-1141": WageDataUnavailableError("service down"),
            }
        )
        session = MapSession(directory, lookup, renderer)
        session.select_job_category("15-1252")
        session.click(RenderedFeature("06059", "Orange", "06"))

        session.select_job_category("29-1141")

        assert session.load_state == LoadState.ERROR
        assert session.effective_selection.is_empty

    def test_pending_fetch_keeps_clicked_county(self, session):
        session.select_job_category("15-1252")
        session.click(RenderedFeature("21111", "Jefferson", "21"))

        session.loader.begin("29-1141")

        assert session.effective_selection.wage.area_code == 30000


class TestPointerEvents:
    """Tests for hover and click routing through the session."""

    def test_hover_uses_current_snapshot(self, session):
        session.select_job_category("15-1252")

        selection = session.hover(RenderedFeature("21111", "Jefferson", "21"))

        assert selection.wage.area_code == 30000

    def test_hover_never_repaints(self, session, renderer):
        session.select_job_category("15-1252")

        session.hover(RenderedFeature("06059", "Orange", "06"))
        session.leave()

        assert len(renderer.paint_calls) == 1

    def test_click_then_hover_then_leave(self, session):
        session.select_job_category("15-1252")

        session.click(RenderedFeature("06059", "Orange", "06"))
        session.hover(RenderedFeature("12095", "Orange", "12"))
        assert session.effective_selection.wage.area_code == 40000

        session.leave()
        assert session.effective_selection.wage.area_code == 12345

        session.clear_selection()
        assert session.effective_selection.is_empty

    def test_coarse_pointer(self, directory, static_lookup, renderer):
        session = MapSession(directory, static_lookup, renderer, coarse_pointer=True)
        session.select_job_category("15-1252")

        assert session.hover(RenderedFeature("06059", "Orange", "06")) is None
        assert session.click(RenderedFeature("06059", "Orange", "06")).has_data

    def test_focus_uses_configured_padding(self, directory, static_lookup, renderer):
        config = MapConfig(max_zoom=7, fit_padding={"left": 0})
        session = MapSession(directory, static_lookup, renderer, map_config=config)
        feature = RenderedFeature(
            "17113", "McLean", "17", {"type": "Point", "coordinates": [-88.8, 40.5]}
        )

        request = session.focus_locations([("McLean County", "IL")], [feature])

        assert request.max_zoom == 7
        assert request.padding.left == 0
        assert renderer.fit_requests == [request]
