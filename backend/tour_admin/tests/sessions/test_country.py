from tour_admin.sessions.country import resolve_country
from tour_admin.sessions.session import SELECTED_COUNTRY_CODE, SELECTED_COUNTRY_ID
from tour_admin.tests.utils.backend import COUNTRIES


class TestResolveCountry:
    def test_empty_list(self):
        session = {SELECTED_COUNTRY_ID: "c-us"}
        assert resolve_country([], session) is None
        assert session == {SELECTED_COUNTRY_ID: "c-us"}

    def test_stored_id_wins(self):
        session = {SELECTED_COUNTRY_ID: "c-us", SELECTED_COUNTRY_CODE: "MX"}
        assert resolve_country(COUNTRIES, session)["code"] == "US"

    def test_unknown_id_falls_back_to_session_code(self):
        session = {SELECTED_COUNTRY_ID: "gone", SELECTED_COUNTRY_CODE: "us"}
        country = resolve_country(COUNTRIES, session)

        assert country["id"] == "c-us"
        assert session == {SELECTED_COUNTRY_ID: "c-us", SELECTED_COUNTRY_CODE: "US"}

    def test_default_code(self):
        session = {}
        assert resolve_country(COUNTRIES, session)["id"] == "c-mx"
        assert session[SELECTED_COUNTRY_CODE] == "MX"

    def test_default_name_when_code_missing(self):
        countries = [
            {"id": "1", "name_es": "Canadá", "name_en": "Canada"},
            {"id": "2", "name_es": "México", "name_en": "Mexico"},
        ]
        session = {}
        assert resolve_country(countries, session, language="en")["id"] == "2"
        assert session == {SELECTED_COUNTRY_ID: "2"}

    def test_first_country_as_last_resort(self):
        countries = [{"id": "1", "code": "CA"}, {"id": "2", "code": "PE"}]
        assert resolve_country(countries, {}, default_code="MX")["code"] == "CA"

    def test_always_returns_member_of_list(self):
        sessions = [
            {},
            {SELECTED_COUNTRY_ID: "c-us"},
            {SELECTED_COUNTRY_ID: "missing"},
            {SELECTED_COUNTRY_CODE: "ZZ"},
            {SELECTED_COUNTRY_ID: "missing", SELECTED_COUNTRY_CODE: "ZZ"},
        ]
        for session in sessions:
            assert resolve_country(COUNTRIES, dict(session)) in COUNTRIES
