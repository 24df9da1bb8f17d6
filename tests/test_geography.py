"""Tests for state codes, county normalization, the Area Directory and the resolver."""

import logging

import pytest

from wagemap.domain.models import GeographyEntry, WageArea, wages_by_area
from wagemap.geography.directory import AreaDirectory
from wagemap.geography.normalize import (
    CountyKey,
    county_key,
    display_county_name,
    normalize_county_name,
)
from wagemap.geography.resolver import build_reverse_index, resolve, resolve_wage
from wagemap.geography.states import FIPS_STATE, STATE_FIPS, state_abbrev, state_fips


def _entry(area_code, county, state_abbrev, area_name="Area"):
    return GeographyEntry(
        area_code=area_code, area_name=area_name, county_name=county, state_abbrev=state_abbrev
    )


class TestStates:
    """Tests for the state FIPS table."""

    @pytest.mark.parametrize("value", ["CA", "ca", " Ca ", "06", "6", 6])
    def test_state_fips_accepts_common_forms(self, value):
        assert state_fips(value) == "06"

    @pytest.mark.parametrize("value", [None, "", "ZZ", "03", "99", "California"])
    def test_state_fips_unknown_is_none(self, value):
        assert state_fips(value) is None

    def test_territories_present(self):
        assert STATE_FIPS["PR"] == "72"
        assert STATE_FIPS["GU"] == "66"
        assert STATE_FIPS["VI"] == "78"
        assert STATE_FIPS["AS"] == "60"
        assert STATE_FIPS["MP"] == "69"
        assert STATE_FIPS["DC"] == "11"

    def test_table_size(self):
        # 50 states, DC and five territories
        assert len(STATE_FIPS) == 56
        assert len(FIPS_STATE) == 56

    def test_state_abbrev(self):
        assert state_abbrev("21") == "KY"
        assert state_abbrev("ky") == "KY"
        assert state_abbrev("00") is None


class TestNormalize:
    """Tests for county name normalization."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Orange County", "orange"),
            ("ORANGE", "orange"),
            ("  Orleans   Parish ", "orleans"),
            ("San Juan Municipio", "san juan"),
            ("Matanuska-Susitna Borough", "matanuska-susitna"),
            ("Valdez-Cordova Census Area", "valdez-cordova"),
            ("Valdez-Cordova Census  Area", "valdez-cordova"),
            ("St. Mary's County", "st. mary's"),
        ],
    )
    def test_normalize_county_name(self, raw, expected):
        assert normalize_county_name(raw) == expected

    def test_suffix_only_removed_as_whole_word(self):
        """Test that suffix words inside other words survive."""
        assert normalize_county_name("Boroughbridge") == "boroughbridge"
        assert normalize_county_name("Countyline County") == "countyline"

    def test_blank_names(self):
        assert normalize_county_name(None) == ""
        assert normalize_county_name("   ") == ""
        assert normalize_county_name("County") == ""

    def test_county_key(self):
        key = county_key("Jefferson County", "KY")
        assert key == CountyKey("jefferson", "21")
        assert str(key) == "jefferson::21"

    def test_county_key_unusable_parts(self):
        assert county_key("Parish", "LA") is None
        assert county_key("Jefferson County", "XX") is None

    @pytest.mark.parametrize(
        "normalized,expected",
        [
            ("orange", "Orange"),
            ("los angeles", "Los Angeles"),
            ("matanuska-susitna", "Matanuska-Susitna"),
            ("st. mary's", "St. Mary's"),
            ("prince george's", "Prince George's"),
            ("mclean", "McLean"),
            ("o'brien", "O'Brien"),
        ],
    )
    def test_display_county_name(self, normalized, expected):
        assert display_county_name(normalized) == expected

    def test_display_name_cannot_recover_internal_capitals(self):
        """Test the documented limit of the title-case heuristic."""
        assert display_county_name("dekalb") == "Dekalb"


class TestAreaDirectory:
    """Tests for the Area Directory."""

    def test_from_mapping(self, directory):
        assert len(directory) == 9
        assert 12345 in directory
        record = directory.get(12345)
        assert record.name == "Metro Alpha, CA"
        assert [ref.county for ref in record.counties] == ["Orange County", "Los Angeles County"]

    def test_unknown_area(self, directory):
        assert directory.get(1) is None
        assert 1 not in directory

    def test_entries_preserve_order(self, directory):
        entries = list(directory.entries())
        assert [(e.area_code, e.county_name) for e in entries[:3]] == [
            (12345, "Orange County"),
            (12345, "Los Angeles County"),
            (20000, "Jefferson County"),
        ]
        assert entries[0].state_abbrev == "CA"
        assert entries[0].area_name == "Metro Alpha, CA"

    def test_to_mapping_round_trip(self, county_mapping, directory):
        assert directory.to_mapping() == county_mapping

    def test_from_mapping_skips_malformed(self, caplog):
        """Test that bad area codes and bad county rows are skipped with warnings."""
        data = {
            "abc": {"name": "Bad code", "counties": []},
            "100": {
                "name": "Mixed",
                "counties": [
                    {"county": "Good County", "state": "Texas", "stateAb": "TX"},
                    {"county": "", "state": "Texas", "stateAb": "TX"},
                    {"county": "No State County"},
                ],
            },
        }

        with caplog.at_level(logging.WARNING):
            directory = AreaDirectory.from_mapping(data)

        assert len(directory) == 1
        assert [ref.county for ref in directory.get(100).counties] == ["Good County"]
        events = [getattr(r, "event", None) for r in caplog.records]
        assert events.count("directory.area.skipped") == 1
        assert events.count("directory.county.skipped") == 2

    def test_from_entries_first_name_wins(self):
        directory = AreaDirectory.from_entries(
            [
                _entry(1, "A County", "TX", area_name="First Name"),
                _entry(1, "B County", "TX", area_name="Second Name"),
            ]
        )
        assert directory.get(1).name == "First Name"
        assert len(directory.get(1).counties) == 2

    def test_is_read_only(self, directory):
        with pytest.raises(TypeError):
            directory._areas[1] = None


class TestReverseIndex:
    """Tests for building the reverse index."""

    def test_keys_by_state(self, reverse_index):
        assert reverse_index.get(CountyKey("jefferson", "01")) == (20000,)
        assert reverse_index.get(CountyKey("jefferson", "21")) == (30000,)
        assert reverse_index.get(CountyKey("orange", "06")) == (12345,)
        assert reverse_index.get(CountyKey("orange", "12")) == (40000,)

    def test_names_in_directory_order(self, reverse_index):
        assert list(reverse_index.names()) == [
            "orange",
            "los angeles",
            "jefferson",
            "orleans",
            "matanuska-susitna",
            "mclean",
            "st. mary's",
            "kalawao",
        ]

    def test_keys_for_name(self, reverse_index):
        assert reverse_index.keys_for_name("orange") == (
            CountyKey("orange", "06"),
            CountyKey("orange", "12"),
        )
        assert reverse_index.keys_for_name("nowhere") == ()

    def test_multi_area_county_keeps_order_without_duplicates(self):
        index = build_reverse_index(
            [
                _entry(500, "Split County", "VA"),
                _entry(400, "Split County", "VA"),
                _entry(500, "Split County", "VA"),
            ]
        )
        assert index.get(CountyKey("split", "51")) == (500, 400)

    def test_unkeyable_rows_skipped(self, caplog):
        entries = [
            _entry(1, "Good County", "TX"),
            _entry(2, "County", "TX"),
            _entry(3, "Lost County", "XX"),
        ]

        with caplog.at_level(logging.WARNING):
            index = build_reverse_index(entries)

        assert len(index) == 1
        skipped = [r for r in caplog.records if getattr(r, "event", None) == "resolver.entry.skipped"]
        assert len(skipped) == 2

    def test_read_only(self, reverse_index):
        with pytest.raises(TypeError):
            reverse_index._entries[CountyKey("x", "01")] = (1,)


class TestResolve:
    """Tests for county resolution."""

    @pytest.mark.parametrize("state", ["KY", "ky", "21", 21])
    def test_resolve_by_state(self, reverse_index, state):
        assert resolve(reverse_index, "Jefferson", state) == [30000]

    def test_every_directory_entry_resolves_to_its_area(self, directory, reverse_index):
        """Test that each county resolves back to its own area by abbreviation and FIPS."""
        entries = list(directory.entries())
        assert entries

        for entry in entries:
            by_abbrev = resolve(reverse_index, entry.county_name, entry.state_abbrev)
            by_fips = resolve(reverse_index, entry.county_name, state_fips(entry.state_abbrev))
            assert entry.area_code in by_abbrev, entry
            assert by_fips == by_abbrev, entry

    def test_resolve_accepts_suffix_and_case(self, reverse_index):
        assert resolve(reverse_index, "JEFFERSON COUNTY", "AL") == [20000]

    def test_resolve_unknown_county(self, reverse_index):
        assert resolve(reverse_index, "Atlantis", "CA") == []
        assert resolve(reverse_index, "", "CA") == []
        assert resolve(reverse_index, None, "CA") == []

    def test_resolve_known_name_wrong_state(self, reverse_index):
        assert resolve(reverse_index, "Jefferson", "TX") == []

    def test_resolve_without_state_falls_back_across_states(self, reverse_index, caplog):
        with caplog.at_level(logging.DEBUG, logger="wagemap.geography.resolver"):
            codes = resolve(reverse_index, "Orange", None)

        assert codes == [12345, 40000]
        assert any(getattr(r, "event", None) == "resolver.resolve.stateless" for r in caplog.records)

    def test_resolve_with_unknown_state_falls_back(self, reverse_index):
        assert resolve(reverse_index, "Jefferson", "ZZ") == [20000, 30000]

    def test_resolve_wage_prefers_first_code_with_data(self):
        index = build_reverse_index(
            [
                _entry(500, "Split County", "VA"),
                _entry(400, "Split County", "VA"),
            ]
        )
        only_second = WageArea(area_code=400, tier1=1, tier2=2, tier3=3, tier4=4)

        wage = resolve_wage(index, wages_by_area([only_second]), "Split", "VA")

        assert wage is only_second

    def test_resolve_wage_no_data(self, reverse_index, developer_wages):
        by_area = wages_by_area(developer_wages)
        assert resolve_wage(reverse_index, by_area, "Kalawao", "HI") is None
        assert resolve_wage(reverse_index, by_area, "Atlantis", "CA") is None
        assert resolve_wage(reverse_index, {}, "Orange", "CA") is None
