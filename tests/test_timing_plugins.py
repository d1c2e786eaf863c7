"""
Tests for the CPS, minimum duration and gap plugins.
"""

from conftest import context, sub
from plugins.cps import fix_cps, required_duration_ms
from plugins.gap import enforce_gap
from plugins.min_duration import fix_min_duration


def test_cps_extends_end_time():
    result = fix_cps([sub(1, 0, 1000, "A" * 42)], {'max_cps': 25}, context('cps'))
    assert result[0].end_ms == 1680


def test_cps_leaves_readable_entries_alone():
    entries = [sub(1, 0, 1000, "0123456789")]
    assert fix_cps(entries, {'max_cps': 25}, context('cps'))[0].end_ms == 1000


def test_cps_ignores_markup():
    entries = [sub(1, 0, 200, "<b>Hello</b>")]
    # 5 visible characters in 0.2 s = exactly 25 CPS
    assert fix_cps(entries, {'max_cps': 25}, context('cps'))[0].end_ms == 200


def test_cps_caps_before_next_entry_without_gap_plugin():
    entries = [sub(1, 0, 1000, "A" * 50), sub(2, 1500, 2500, "Hi")]
    result = fix_cps(entries, {'max_cps': 25}, context('cps'))
    assert result[0].end_ms == 1499
    assert result[1].end_ms == 2500


def test_cps_respects_active_gap_plugin():
    entries = [sub(1, 0, 1000, "A" * 50), sub(2, 1500, 2500, "Hi")]
    ctx = context('cps', 'gap', gap={'min_gap': 200})
    assert fix_cps(entries, {'max_cps': 25}, ctx)[0].end_ms == 1300


def test_cps_ignores_inactive_gap_configuration():
    entries = [sub(1, 0, 1000, "A" * 50), sub(2, 1500, 2500, "Hi")]
    ctx = context('cps', gap={'min_gap': 200})
    assert fix_cps(entries, {'max_cps': 25}, ctx)[0].end_ms == 1499


def test_cps_never_shrinks():
    entries = [sub(1, 0, 1400, "A" * 50), sub(2, 1500, 2500, "Hi")]
    ctx = context('cps', 'gap', gap={'min_gap': 200})
    assert fix_cps(entries, {'max_cps': 25}, ctx)[0].end_ms == 1400


def test_cps_zero_duration_and_empty_text():
    entries = [sub(1, 1000, 1000, "Hey"), sub(2, 5000, 5000, "")]
    result = fix_cps(entries, {'max_cps': 25}, context('cps'))
    assert result[0].end_ms == 1120
    assert result[1].end_ms == 5000


def test_required_duration_rounds_up():
    assert required_duration_ms(42, 25) == 1680
    assert required_duration_ms(10, 3) == 3334
    assert required_duration_ms(1, 25) == 40


def test_required_duration_has_no_float_drift():
    assert required_duration_ms(161, 5) == 32200


def test_min_duration_extends_short_entries():
    entries = [sub(1, 0, 500, "Kratko"), sub(2, 5000, 8000, "Dugo")]
    result = fix_min_duration(entries, {'min_duration': 2000}, context('min_duration'))
    assert result[0].end_ms == 2000
    assert result[1].end_ms == 8000


def test_min_duration_caps_before_next_entry():
    entries = [sub(1, 0, 500, "A"), sub(2, 1000, 1500, "B")]
    result = fix_min_duration(entries, {'min_duration': 2000}, context('min_duration'))
    assert result[0].end_ms == 999
    assert result[1].end_ms == 3000


def test_min_duration_respects_active_gap_plugin():
    entries = [sub(1, 0, 500, "A"), sub(2, 1000, 1500, "B")]
    ctx = context('min_duration', 'gap', gap={'min_gap': 125})
    assert fix_min_duration(entries, {'min_duration': 2000}, ctx)[0].end_ms == 875


def test_min_duration_never_shrinks():
    entries = [sub(1, 0, 950, "A"), sub(2, 1000, 4000, "B")]
    ctx = context('min_duration', 'gap', gap={'min_gap': 125})
    assert fix_min_duration(entries, {'min_duration': 2000}, ctx)[0].end_ms == 950


def test_gap_trims_end_time():
    entries = [sub(1, 0, 1950, "A"), sub(2, 2000, 3000, "B")]
    result = enforce_gap(entries, {'min_gap': 125}, context('gap'))
    assert result[0].end_ms == 1875
    assert result[1].end_ms == 3000


def test_gap_leaves_sufficient_gaps():
    entries = [sub(1, 0, 1875, "A"), sub(2, 2000, 3000, "B")]
    assert enforce_gap(entries, {'min_gap': 125}, context('gap')) == entries


def test_gap_trims_overlaps():
    entries = [sub(1, 0, 2500, "A"), sub(2, 2000, 3000, "B")]
    assert enforce_gap(entries, {'min_gap': 100}, context('gap'))[0].end_ms == 1900


def test_gap_never_produces_empty_duration():
    entries = [sub(1, 1900, 1990, "A"), sub(2, 2000, 3000, "B")]
    result = enforce_gap(entries, {'min_gap': 125}, context('gap'))
    assert result[0].end_ms == 1990
    assert result[0].end_ms > result[0].start_ms


def test_gap_zero_allows_touching_entries():
    entries = [sub(1, 0, 2000, "A"), sub(2, 2000, 3000, "B")]
    assert enforce_gap(entries, {'min_gap': 0}, context('gap')) == entries


def test_plugins_do_not_modify_their_input():
    entries = [sub(1, 0, 100, "A" * 30), sub(2, 150, 300, "B")]
    ctx = context('cps', 'min_duration', 'gap', gap={'min_gap': 125})
    fix_cps(entries, {'max_cps': 25}, ctx)
    fix_min_duration(entries, {'min_duration': 2000}, ctx)
    enforce_gap(entries, {'min_gap': 125}, ctx)
    assert [entry.end_ms for entry in entries] == [100, 300]
