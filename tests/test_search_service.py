"""Search service behaviour against canned result pages."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from rhyme_suffix.app.services.search_service import (
    RhymeSearchService,
    prepare_suffixes,
    query_string_url,
    random_throttle,
    snapshot_stem,
)
from rhyme_suffix.config import Settings
from rhyme_suffix.core.frequency_map import FrequencyMap
from rhyme_suffix.errors import RemoteUnavailableError, SearchFailedError

from conftest import FakePageSession, results_page, session_opener_for


def _service(settings: Settings, session: FakePageSession, sleeps: List[float], **kwargs) -> RhymeSearchService:
    return RhymeSearchService(
        settings,
        session_opener=session_opener_for(session),
        delay_policy=lambda: 0.7,
        sleep=sleeps.append,
        **kwargs,
    )


def test_two_suffix_example_produces_ranked_union(settings, sleeps):
    session = FakePageSession(
        {
            "ando": results_page("ando", ["comprando", "llorando", "cantando"]),
            "endo": results_page("endo", ["viendo", "siendo"]),
        }
    )
    service = _service(settings, session, sleeps)

    result = service.search(["ando", "endo"], limit=2)

    assert [outcome.ranked for outcome in result.outcomes] == [
        ["cantando", "comprando"],
        ["siendo", "viendo"],
    ]
    assert result.union == ["cantando", "comprando", "siendo", "viendo"]
    assert session.closed is True


def test_throttle_runs_only_between_suffixes(settings, sleeps):
    session = FakePageSession()
    service = _service(settings, session, sleeps)

    service.search(["ando", "endo", "ido"])

    assert sleeps == [0.7, 0.7]


def test_suffixes_are_normalized_and_capped(settings, sleeps):
    session = FakePageSession()
    service = _service(settings, session, sleeps)

    result = service.search(["ANDO", "!!", "endo.", "ido", "ado", "udo", "ia", "eo"])

    assert result.suffixes == ["ando", "endo", "ido", "ado", "udo"]
    assert session.filled_terms == ["ando", "endo", "ido", "ado", "udo"]


def test_empty_suffix_list_does_not_open_a_session(settings, sleeps):
    session = FakePageSession()
    service = _service(settings, session, sleeps)

    result = service.search(["", "¿?"])

    assert result.outcomes == []
    assert session.calls == []
    assert session.closed is False


def test_two_letter_suffix_falls_back_to_raw_term(settings, sleeps):
    session = FakePageSession({"os": results_page("os", ["ramos", "vamos", "os"])})
    service = _service(settings, session, sleeps)

    result = service.search(["os"])

    assert session.filled_terms == ["dos", "os"]
    assert result.outcomes[0].carrier == "os"
    assert result.union == ["ramos", "vamos"]


def test_two_letter_suffix_stops_at_first_productive_term(settings, sleeps):
    session = FakePageSession({"dos": results_page("dos", ["tos", "ramos"])})
    service = _service(settings, session, sleeps)

    result = service.search(["os"])

    assert session.filled_terms == ["dos"]
    assert result.outcomes[0].carrier == "dos"
    assert result.union == ["ramos", "tos"]


def test_frequency_map_orders_results(settings, sleeps):
    session = FakePageSession({"ando": results_page("ando", ["comprando", "llorando", "cantando"])})
    service = _service(
        settings,
        session,
        sleeps,
        frequency_map=FrequencyMap({"llorando": 50, "comprando": 5}),
    )

    result = service.search(["ando"], limit=20)

    assert result.union == ["llorando", "comprando", "cantando"]


def test_no_matches_is_not_an_error(settings, sleeps):
    session = FakePageSession()
    service = _service(settings, session, sleeps)

    result = service.search(["mar"])

    assert result.has_matches is False
    assert result.outcomes[0].failed is False
    assert result.union == []


def test_remote_failure_skips_only_that_suffix(settings, sleeps, caplog):
    session = FakePageSession(
        {"endo": results_page("endo", ["viendo"])},
        failures={"ando": RemoteUnavailableError("Timed out during navigate")},
    )
    service = _service(settings, session, sleeps)

    with caplog.at_level("WARNING", logger="rhyme_suffix"):
        result = service.search(["ando", "endo"])

    assert result.union == ["viendo"]
    assert [outcome.suffix for outcome in result.failures] == ["ando"]
    assert any("Suffix query failed" in record.getMessage() for record in caplog.records)
    assert service.telemetry.snapshot()["counters"]["failures"] == 1


def test_all_suffixes_failing_raises_and_closes_session(settings, sleeps):
    error = RemoteUnavailableError("Timed out during wait_for_element")
    session = FakePageSession(failures={"ando": error, "endo": error})
    service = _service(settings, session, sleeps)

    with pytest.raises(SearchFailedError):
        service.search(["ando", "endo"])

    assert session.closed is True


def test_unexpected_errors_propagate_and_close_session(settings, sleeps):
    session = FakePageSession(failures={"ando": RuntimeError("boom")})
    service = _service(settings, session, sleeps)

    with pytest.raises(RuntimeError):
        service.search(["ando"])

    assert session.closed is True


def test_debug_mode_writes_snapshots(settings, sleeps):
    session = FakePageSession({"ando": results_page("ando", ["cantando"])})
    service = _service(settings, session, sleeps)

    service.search(["ando"], debug=True)

    debug_dir: Path = settings.debug_dir
    assert (debug_dir / "shot_q_ando.png").exists()
    html = (debug_dir / "page_q_ando.html").read_text(encoding="utf-8")
    assert "cantando" in html


def test_page_interaction_follows_settings(settings, sleeps):
    session = FakePageSession()
    service = _service(settings, session, sleeps)

    service.search(["ando"])

    assert session.calls[:5] == [
        ("navigate", settings.base_url, "45000"),
        ("wait_for_element", "#palabra", "15000"),
        ("fill", "#palabra", "ando"),
        ("submit", 'input[type="submit"].botFoBu'),
        ("wait", "800"),
    ]


def test_flat_strategy_override(settings, sleeps):
    html = "<html><body><p>Hoy estoy cantando y bailando</p></body></html>"
    session = FakePageSession({"ando": html})
    service = _service(settings, session, sleeps)

    assert service.search(["ando"], strategy="structured").union == []
    assert service.search(["ando"], strategy="flat").union == ["bailando", "cantando"]


def test_helpers():
    assert snapshot_stem("ción 2") == "q_ción_2"
    assert prepare_suffixes([" Ando ", None, "x"], max_suffixes=1) == ["ando"]

    delay = random_throttle(600, 1000)
    for _ in range(20):
        assert 0.6 <= delay() <= 1.0


def test_missing_search_input_falls_back_to_query_string(settings, sleeps, caplog):
    session = FakePageSession(
        {"ción": results_page("ción", ["canción", "pasión", "ción"])},
        has_input=False,
    )
    service = _service(settings, session, sleeps)

    with caplog.at_level("WARNING", logger="rhyme_suffix"):
        result = service.search(["ción"])

    navigations = [call[1] for call in session.calls if call[0] == "navigate"]
    assert navigations == [settings.base_url, f"{settings.base_url}?texto=ci%C3%B3n"]
    assert session.load_states == ["domcontentloaded", "networkidle"]
    assert session.filled_terms == []
    assert result.failures == []
    assert result.union == ["canción", "pasión"]
    assert any("falling back to query string" in record.getMessage() for record in caplog.records)


def test_query_string_url_escapes_the_term():
    assert query_string_url("https://example.test/rimas.php", "ñu y") == (
        "https://example.test/rimas.php?texto=%C3%B1u%20y"
    )


def test_unwritable_debug_dir_does_not_change_results(tmp_path: Path, sleeps, caplog):
    blocked = tmp_path / "not-a-dir"
    blocked.write_text("occupied", encoding="utf-8")
    settings = Settings(corpus_path=tmp_path / "missing.txt", debug_dir=blocked)
    pages = {"ando": results_page("ando", ["cantando"])}

    plain = _service(settings, FakePageSession(pages), sleeps).search(["ando"])
    with caplog.at_level("WARNING", logger="rhyme_suffix"):
        debugged = _service(settings, FakePageSession(pages), sleeps).search(["ando"], debug=True)

    assert debugged.union == plain.union == ["cantando"]
    assert debugged.failures == []
    assert any("Debug snapshot skipped" in record.getMessage() for record in caplog.records)


def test_screenshot_failure_keeps_the_suffix(settings, sleeps):
    session = FakePageSession(
        {"ando": results_page("ando", ["cantando"])},
        screenshot_error=RemoteUnavailableError("Timed out during screenshot"),
    )
    service = _service(settings, session, sleeps)

    result = service.search(["ando"], debug=True)

    assert result.union == ["cantando"]
    assert result.failures == []
