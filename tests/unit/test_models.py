"""
Unit tests for the resume, polish and report data models.
"""

import pytest
from pydantic import ValidationError

from resume_studio.models import (
    CanonicalResume,
    DocumentFormat,
    PolishedResume,
    Provenance,
    RasterizedDocument,
    RenderStyle,
    ScoreReport,
    ReportMeta,
)


def _provenance() -> Provenance:
    return Provenance(provider="groq", model="fake-model", polished_at="2024-01-01T00:00:00+00:00")


@pytest.mark.unit
def test_camel_case_profile_is_accepted(resume):
    """Profile-store records validate directly from camelCase JSON."""
    assert resume.personal_info.full_name == "Ada Lovelace"
    assert resume.work_experience[0].company == "Acme"
    assert resume.work_experience[0].current is True
    assert resume.projects[0].technologies == ["Brass", "Punch cards"]


@pytest.mark.unit
def test_full_dates_are_normalized_to_months(resume):
    globex = resume.work_experience[1]

    assert globex.start_date == "2015-03"
    assert globex.end_date == "2018-12"


@pytest.mark.unit
@pytest.mark.parametrize("bad_date", ["Jan 2020", "2020-13", "20-01"])
def test_malformed_dates_are_rejected(profile, bad_date):
    profile["workExperience"][0]["startDate"] = bad_date

    with pytest.raises(ValidationError):
        CanonicalResume.model_validate(profile)


@pytest.mark.unit
@pytest.mark.parametrize(
    "section, field",
    [
        ("workExperience", "company"),
        ("education", "institution"),
        ("skills", "name"),
        ("projects", "name"),
        ("achievements", "title"),
    ],
)
def test_empty_identifying_field_is_rejected(profile, section, field):
    profile[section][0][field] = "   "

    with pytest.raises(ValidationError):
        CanonicalResume.model_validate(profile)


@pytest.mark.unit
def test_canonical_resume_is_immutable(resume):
    with pytest.raises(ValidationError):
        resume.template_style = "modern"


@pytest.mark.unit
def test_polish_cannot_add_sections_absent_from_input(profile):
    """Enhancements for empty sections or unknown entries are discarded."""
    profile["achievements"] = []
    profile["projects"] = []
    source = CanonicalResume.model_validate(profile)

    polished = PolishedResume(
        source=source,
        achievements_polished=["Invented achievement"],
        projects_polished=["Invented project"],
        experience_bullets={0: ["Real"], 7: ["Invented entry"]},
        education_bullets={3: ["Invented degree"]},
        provenance=_provenance(),
    )

    assert polished.achievements_polished == []
    assert polished.projects_polished == []
    assert polished.experience_bullets == {0: ["Real"]}
    assert polished.education_bullets == {}


@pytest.mark.unit
@pytest.mark.parametrize(
    "tag, expected",
    [
        ("modern", RenderStyle.MODERN),
        (" Creative ", RenderStyle.CREATIVE),
        ("fancy", RenderStyle.CLASSIC),
        (None, RenderStyle.CLASSIC),
        (RenderStyle.ELEGANT, RenderStyle.ELEGANT),
    ],
)
def test_render_style_from_tag(tag, expected):
    assert RenderStyle.from_tag(tag) is expected


@pytest.mark.unit
def test_rasterized_document_requires_an_image():
    with pytest.raises(ValidationError):
        RasterizedDocument(images=[], source_format=DocumentFormat.TEXT)


@pytest.mark.unit
def test_rasterized_document_data_urls():
    doc = RasterizedDocument(images=[b"abc", b"def"], source_format=DocumentFormat.PDF)

    assert doc.page_count == 2
    assert doc.data_urls[0] == "data:image/png;base64,YWJj"


@pytest.mark.unit
def test_score_report_serializes_camel_case():
    report = ScoreReport(
        total=42,
        input_type=DocumentFormat.TEXT,
        meta=ReportMeta(created_at="2024-01-01T00:00:00+00:00"),
    )

    data = report.model_dump(by_alias=True, mode="json")

    assert data["inputType"] == "text"
    assert data["weights"] == {
        "keywordMatch": 25,
        "structureFormatting": 15,
        "grammarClarity": 15,
        "experienceRelevance": 20,
        "designLayout": 25,
    }
    assert data["meta"]["createdAt"] == "2024-01-01T00:00:00+00:00"
    assert data["categories"]["grammarClarity"]["issues"] == []
    assert data["design"]["alignmentSignals"] == "mixed"


@pytest.mark.unit
def test_score_report_total_is_bounded():
    with pytest.raises(ValidationError):
        ScoreReport(
            total=101,
            input_type=DocumentFormat.TEXT,
            meta=ReportMeta(created_at="2024-01-01T00:00:00+00:00"),
        )
