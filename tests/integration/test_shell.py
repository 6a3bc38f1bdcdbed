"""Integration tests for the application shell: wiring, gating and analysis state."""

import asyncio

import pytest

from conftest import ANALYSIS_REPLY, FakeProvider, make_client
from hireme.contexts.editing.resume_data_structure import ResumeData
from hireme.contexts.editing.store import ResumeStore
from hireme.contexts.templating.exceptions import UnknownTemplateError
from hireme.contexts.templating.renderer import TemplateType
from hireme.shell import AnalysisState, AppShell, Tab


@pytest.fixture
def provider():
    return FakeProvider(ANALYSIS_REPLY)


@pytest.fixture
def shell(store, sample_resume, provider):
    store.set(sample_resume)
    return AppShell(store, client=make_client(provider))


@pytest.mark.integration
def test_initial_ui_state(store):
    shell = AppShell(store)

    assert shell.selected_template == TemplateType.MODERN
    assert shell.active_tab == Tab.PERSONAL
    assert shell.analysis_state == AnalysisState.IDLE
    assert not shell.show_analysis
    assert [tab.value for tab in Tab] == ["personal", "experience", "education", "skills", "jd"]


@pytest.mark.integration
def test_select_template_and_tab(shell):
    assert shell.select_template("classic") == TemplateType.CLASSIC
    assert shell.select_tab("jd") == Tab.JOB_DESCRIPTION

    with pytest.raises(UnknownTemplateError):
        shell.select_template("fancy")
    with pytest.raises(ValueError):
        shell.select_tab("hobbies")


@pytest.mark.integration
def test_analysis_gated_on_job_description(shell, provider):
    shell.job_description.set("")

    assert not shell.can_analyze
    assert asyncio.run(shell.run_analysis()) is None
    assert shell.analysis_state == AnalysisState.IDLE
    assert provider.calls == []


@pytest.mark.integration
def test_analysis_gated_without_client(store, sample_resume):
    store.set(sample_resume)

    assert not AppShell(store).can_analyze


@pytest.mark.integration
def test_successful_analysis_opens_report(shell):
    result = asyncio.run(shell.run_analysis())

    assert result.score == 82
    assert shell.analysis_state == AnalysisState.SUCCEEDED
    assert shell.show_analysis
    assert shell.analysis_error is None
    assert "82%" in shell.render_analysis()

    shell.dismiss_analysis()

    assert shell.analysis_state == AnalysisState.IDLE
    assert shell.analysis_result is None
    assert shell.render_analysis() is None


@pytest.mark.integration
def test_failed_analysis_shows_fallback(store, sample_resume):
    store.set(sample_resume)
    shell = AppShell(store, client=make_client(FakeProvider("not json")))

    result = asyncio.run(shell.run_analysis())

    assert result.is_error
    assert shell.analysis_state == AnalysisState.FAILED
    assert shell.show_analysis
    assert shell.analysis_error
    assert "Failed to analyze resume. Please try again." in shell.render_analysis()


@pytest.mark.integration
def test_analysis_inert_while_in_flight(store, sample_resume):
    store.set(sample_resume)
    provider = FakeProvider(ANALYSIS_REPLY, ANALYSIS_REPLY, delay=0.1)
    shell = AppShell(store, client=make_client(provider))

    async def scenario():
        first = asyncio.create_task(shell.run_analysis())
        await asyncio.sleep(0.02)
        assert shell.analysis_state == AnalysisState.REQUESTING
        assert not shell.can_analyze
        second = await shell.run_analysis()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first.score == 82
    assert second is None
    assert len(provider.calls) == 1
    assert shell.can_analyze


@pytest.mark.integration
def test_editors_share_loading_tracker(shell):
    assert shell.personal.loading is shell.loading
    assert shell.experience.loading is shell.loading


@pytest.mark.integration
def test_preview_follows_edits(shell):
    first = shell.render_preview()
    assert shell.render_preview() is first

    shell.personal.set("full_name", "Janet Doe")
    second = shell.render_preview()

    assert "Janet Doe" in second
    assert second != first

    shell.select_template("minimal")
    assert "resume-minimal" in shell.render_preview()


@pytest.mark.integration
def test_export_writes_page(shell, tmp_path, monkeypatch):
    opened = []
    monkeypatch.setattr("hireme.contexts.rendering.exporter.webbrowser.open", lambda url: opened.append(url) or True)

    result = shell.export(tmp_path / "out" / "resume.html", open_browser=True)

    assert result.success
    assert result.template == "modern"
    assert result.output_path.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")
    assert opened == [(tmp_path / "out" / "resume.html").resolve().as_uri()]


@pytest.mark.integration
def test_open_restores_saved_resume(tmp_path):
    path = tmp_path / "local_storage.json"
    shell, result = AppShell.open(path)
    shell.experience.add()
    shell.close()

    reopened, result = AppShell.open(path)

    assert result.restored
    assert len(reopened.data.experience) == 1


@pytest.mark.integration
def test_reset(shell):
    asyncio.run(shell.run_analysis())

    shell.reset()

    assert shell.data == ResumeData.empty()
    assert not shell.show_analysis


@pytest.mark.integration
def test_close_detaches_from_store(store):
    shell = AppShell(store)
    shell.render_preview()
    shell.close()

    store.set(ResumeData.empty())
    # Subscription was dropped, so the stale preview is kept
    assert shell._preview is not None
