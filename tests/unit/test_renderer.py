"""Unit tests for resume and analysis report rendering."""

from dataclasses import replace

import pytest

from hireme.contexts.analysis.analysis_result import AnalysisResult
from hireme.contexts.editing.resume_data_structure import (
    Experience,
    PersonalInfo,
    ResumeData,
    Skill,
)
from hireme.contexts.templating.exceptions import UnknownTemplateError
from hireme.contexts.templating.filters import format_date_range, score_band
from hireme.contexts.templating.renderer import (
    DEFAULT_TEMPLATE,
    TemplateType,
    build_page,
    parse_template_type,
    render_analysis_report,
    render_resume,
)

ALL_TEMPLATES = list(TemplateType)


# =============================================================================
# FILTERS
# =============================================================================


@pytest.mark.unit
def test_format_date_range():
    exp = Experience(id="1", start_date="2020", end_date="2022")

    assert format_date_range(exp) == "2020 - 2022"
    assert format_date_range(exp, " – ") == "2020 – 2022"
    assert format_date_range(replace(exp, current=True)) == "2020 - Present"


@pytest.mark.unit
@pytest.mark.parametrize("score, band", [(100, "good"), (71, "good"), (70, "fair"), (41, "fair"), (40, "poor"), (0, "poor")])
def test_score_band(score, band):
    assert score_band(score) == band


# =============================================================================
# TEMPLATE SELECTION
# =============================================================================


@pytest.mark.unit
def test_parse_template_type():
    assert DEFAULT_TEMPLATE == TemplateType.MODERN
    assert parse_template_type("classic") == TemplateType.CLASSIC
    assert parse_template_type("MINIMAL") == TemplateType.MINIMAL
    assert parse_template_type(TemplateType.MODERN) is TemplateType.MODERN


@pytest.mark.unit
def test_unknown_template(sample_resume):
    with pytest.raises(UnknownTemplateError) as exc_info:
        render_resume(sample_resume, "fancy")

    assert "fancy" in str(exc_info.value)
    assert exc_info.value.valid_templates == ["classic", "modern", "minimal"]


# =============================================================================
# RESUME LAYOUTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_rendering_is_deterministic(sample_resume, template):
    assert render_resume(sample_resume, template) == render_resume(sample_resume, template)


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_renders_entered_content(sample_resume, template):
    html = render_resume(sample_resume, template)

    for text in ("Jane Doe", "jane@example.com", "Acme", "Engineer", "TU Berlin", "2019", "Python"):
        assert text in html


@pytest.mark.unit
def test_minimal_layout_scenario():
    data = ResumeData(
        personal_info=PersonalInfo(full_name="Jane Doe"),
        experience=(
            Experience(id="1", role="Engineer", company="Acme", start_date="2020", end_date="2022"),
        ),
    )

    html = render_resume(data, "minimal")

    assert "Acme" in html
    assert "2020 - 2022" in html


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_current_position_renders_present(sample_resume, template):
    data = replace(sample_resume, experience=(replace(sample_resume.experience[0], current=True),))

    html = render_resume(data, template)

    assert "Present" in html
    assert "2022" not in html
    # Stored value is untouched
    assert data.experience[0].end_date == "2022"


@pytest.mark.unit
@pytest.mark.parametrize("template, separator", [("classic", " – "), ("modern", " – "), ("minimal", " - ")])
def test_date_separator_per_template(sample_resume, template, separator):
    assert f"2020{separator}2022" in render_resume(sample_resume, template)


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_empty_optional_fields_are_omitted(template):
    data = ResumeData(
        personal_info=PersonalInfo(full_name="Jane Doe", email="jane@example.com"),
        skills=(Skill(id="1", name="Python"),),
    )

    html = render_resume(data, template)

    assert "section-summary" not in html
    assert "icon-linkedin" not in html
    assert "icon-portfolio" not in html
    assert "icon-phone" not in html


@pytest.mark.unit
def test_classic_summary_heading(sample_resume):
    assert "Professional Summary" in render_resume(sample_resume, "classic")
    assert "Profile" in render_resume(sample_resume, "modern")


@pytest.mark.unit
def test_minimal_joins_contacts_and_skills(sample_resume):
    data = replace(sample_resume, skills=sample_resume.skills + (Skill(id="9", name="Go"),))

    html = render_resume(data, "minimal")

    assert "Berlin | jane@example.com | 555-0100 | linkedin.com/in/janedoe" in html
    assert "Python, Go" in html


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_skill_level_is_not_rendered(sample_resume, template):
    assert "Expert" not in render_resume(sample_resume, template)


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_text_is_escaped(template):
    data = ResumeData(
        personal_info=PersonalInfo(full_name="<script>alert(1)</script>", email="a&b@example.com"),
        skills=(Skill(id="1", name="C<3"),),
    )

    html = render_resume(data, template)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b@example.com" in html
    assert "C&lt;3" in html


@pytest.mark.unit
@pytest.mark.parametrize("template", ALL_TEMPLATES)
def test_empty_resume_renders(template):
    html = render_resume(ResumeData.empty(), template)

    assert html.startswith("<article")


# =============================================================================
# ANALYSIS REPORT AND PAGE
# =============================================================================


@pytest.mark.unit
def test_analysis_report():
    result = AnalysisResult(
        score=82,
        ats_compatibility="High",
        keyword_matches=["Python", "AWS"],
        missing_keywords=["Kubernetes"],
        suggestions="Mention orchestration.",
    )

    html = render_analysis_report(result)

    assert "82%" in html
    assert "score-good" in html
    assert "High" in html
    assert "Kubernetes" in html
    assert "Mention orchestration." in html
    assert "No specific keywords matched." not in html


@pytest.mark.unit
def test_analysis_report_for_error_result():
    html = render_analysis_report(AnalysisResult.error_result())

    assert "0%" in html
    assert "score-poor" in html
    assert "Error" in html
    assert "No specific keywords matched." in html
    assert "Great job! You covered key terms." in html
    assert "Failed to analyze resume. Please try again." in html


@pytest.mark.unit
def test_build_page(sample_resume):
    body = render_resume(sample_resume, "classic")

    page = build_page(body, "Jane <Doe>")

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Jane &lt;Doe&gt;</title>" in page
    assert "@page" in page
    assert body in page
