"""Jinja2 filters shared by the resume and report templates."""

PRESENT_LABEL = "Present"

# Score thresholds for the analysis report colour bands
GOOD_SCORE_THRESHOLD = 70
FAIR_SCORE_THRESHOLD = 40


def format_date_range(experience, separator: str = " - ", present_label: str = PRESENT_LABEL) -> str:
    """
    Format an experience's date range for display.

    While experience.current is set the stored end date is masked by
    present_label; the stored value itself is left as entered.

    Example:
        format_date_range(Experience(id="1", start_date="2020", end_date="2022"))
        # "2020 - 2022"
    """
    end = present_label if experience.current else experience.end_date
    return f"{experience.start_date}{separator}{end}"


def score_band(score) -> str:
    """Map an analysis score to "good" (>70), "fair" (>40) or "poor"."""
    if score > GOOD_SCORE_THRESHOLD:
        return "good"
    if score > FAIR_SCORE_THRESHOLD:
        return "fair"
    return "poor"
