"""
Tests for the plugin pipeline and its change reports.
"""

from conftest import make_document, sub
from plugins import ALL_PLUGINS
from plugins.pipeline import ENCODING_OVERRIDE_NOTE, PluginPipeline
from plugins.settings import PluginSettings


def run(document, enable=(), disable=(), **params):
    settings = PluginSettings()
    for plugin_id in enable:
        settings.set_enabled(plugin_id, True)
    for plugin_id in disable:
        settings.set_enabled(plugin_id, False)
    for name, value in params.items():
        plugin_id, key = name.split('__')
        settings.set_param(plugin_id, key, value)
    return PluginPipeline(settings.snapshot()).run(document)


def test_plugins_run_in_fixed_order():
    assert [plugin.id for plugin in ALL_PLUGINS] == [
        'remove_ads', 'cyrillization', 'long_lines', 'cps', 'min_duration', 'gap', 'encoding',
    ]


def test_default_run_fixes_reading_speed():
    document = make_document([sub(1, 0, 1000, "A" * 42), sub(2, 3000, 4000, "Hi")])
    processed, report = run(document)

    assert [entry.end_ms for entry in processed.entries] == [1680, 4000]
    assert report.summaries == ["CPS (Characters Per Second) applied in 1 subtitle lines"]
    assert report.notes == []
    assert report.has_changes
    assert processed.changed


def test_input_document_is_not_modified():
    document = make_document([sub(1, 0, 1000, "A" * 42), sub(2, 3000, 4000, "Hi")])
    run(document)
    assert document.original_entries[0].end_ms == 1000
    assert document.entries[0].end_ms == 1000
    assert not document.changed


def test_reruns_are_not_cumulative():
    document = make_document([sub(1, 0, 1000, "Zdravo")])
    first, _ = run(document, enable=['cyrillization'])
    second, report = run(document, enable=['cyrillization'])
    assert first.entries == second.entries
    assert second.entries[0].lines == ["Здраво"]
    assert report.summaries == ["Transliterated to Cyrillic"]


def test_run_with_nothing_enabled_reports_no_changes():
    document = make_document([sub(1, 0, 1000, "A" * 42)])
    processed, report = run(document, disable=['cps', 'gap'])
    assert not report.has_changes
    assert report.outcomes == []
    assert not processed.changed


def test_ad_removal_summary():
    document = make_document([
        sub(1, 0, 1000, "www.titlovi.com"),
        sub(2, 2000, 3000, "Prvi"),
        sub(3, 4000, 5000, "Preuzeto sa www.titlovi.com"),
    ])
    processed, report = run(document, enable=['remove_ads'], disable=['cps', 'gap'])
    assert report.summaries == ["Removed 2 ad subtitles"]
    assert [entry.index for entry in processed.entries] == [1]

    document = make_document([sub(1, 0, 1000, "Prvi"), sub(2, 2000, 3000, "www.titlovi.com")])
    _, report = run(document, enable=['remove_ads'], disable=['cps', 'gap'])
    assert report.summaries == ["Removed 1 ad subtitle"]
    assert report.outcomes[0].removed == 1


def test_extension_respects_gap_then_gap_trims():
    document = make_document([sub(1, 0, 1000, "A" * 42), sub(2, 1100, 2000, "Hi")])
    processed, report = run(document)
    assert processed.entries[0].end_ms == 975
    assert report.summaries == ["Gap (Minimum Gap) applied in 1 subtitle lines"]


def test_encoding_target_changes_working_encoding():
    document = make_document([sub(1, 0, 3000, "Hi")], encoding='windows-1250')
    processed, report = run(document, enable=['encoding'], encoding__target_encoding=1)
    assert processed.encoding == 'utf-8'
    assert processed.original_encoding == 'windows-1250'
    assert report.notes == ["Encoding changed: windows-1250 → utf-8"]


def test_encoding_keep_original_adds_no_note():
    document = make_document([sub(1, 0, 3000, "Hi")], encoding='windows-1250')
    processed, report = run(document, enable=['encoding'])
    assert processed.encoding == 'windows-1250'
    assert report.notes == []


def test_cyrillization_overrides_windows_1250():
    document = make_document([sub(1, 0, 3000, "Zdravo")], encoding='windows-1250')
    processed, report = run(document, enable=['cyrillization'])
    assert processed.encoding == 'windows-1251'
    assert report.notes == [ENCODING_OVERRIDE_NOTE]
    assert processed.to_bytes().endswith("Здраво\n".encode('cp1251'))


def test_override_wins_over_explicit_target():
    document = make_document([sub(1, 0, 3000, "Zdravo")], encoding='utf-8')
    processed, report = run(document, enable=['cyrillization', 'encoding'],
                            encoding__target_encoding=2)
    assert processed.encoding == 'windows-1251'
    assert report.notes == ["Encoding changed: utf-8 → windows-1250", ENCODING_OVERRIDE_NOTE]


def test_cyrillization_keeps_utf8():
    document = make_document([sub(1, 0, 3000, "Zdravo")], encoding='utf-8')
    processed, report = run(document, enable=['cyrillization'])
    assert processed.encoding == 'utf-8'
    assert report.notes == []


def test_full_chain():
    document = make_document([
        sub(1, 0, 1000, "Preuzeto sa www.titlovi.com"),
        sub(2, 1000, 1500, "Ovo je jedna veoma dugačka rečenica koja ne staje u red"),
        sub(3, 1550, 4000, "Kratko"),
    ])
    processed, report = run(document, enable=['remove_ads', 'cyrillization', 'long_lines',
                                              'min_duration'])

    assert len(processed.entries) == 2
    first, second = processed.entries
    assert first.index == 1
    assert len(first.lines) == 2
    assert first.lines[0].startswith("Ово је")
    # Trimmed back to keep the minimum gap before the next entry
    assert first.end_ms == 1550 - 125
    assert second.lines == ["Кратко"]
    assert report.summaries[:2] == ["Removed 1 ad subtitle", "Transliterated to Cyrillic"]
    assert "Long Lines applied in 1 subtitle lines" in report.summaries
