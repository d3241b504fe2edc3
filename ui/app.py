"""
Survey Alignment UI

A Streamlit application showing how closely each pair of users
answered a survey's ordinal questions.

Design: Quiet dashboard aesthetic
- Soft neutral palette (off-white, charcoal, subtle teal accent)
- One collapsible section per user pair
- Colour-coded score bands (full, partial, none)

Run with: streamlit run ui/app.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import streamlit as st

from alignment.configs import load_config, get_config_value, valid_quantiles
from alignment.comparison import ComparisonStatus, compare_all
from alignment.data_loading import load_survey
from alignment.evaluation import create_comparison_report, format_total, round_percent
from alignment.scoring import ScoreBand

# =============================================================================
# CONSTANTS
# =============================================================================

CONFIG_PATH = project_root / "configs" / "config.yaml"
ALL_QUESTIONS = "All questions"

# =============================================================================
# DESIGN SYSTEM - Colors & Styles
# =============================================================================

COLORS = {
    "background": "#FAFAFA",
    "card_bg": "#FFFFFF",
    "text_primary": "#2D3748",
    "text_secondary": "#718096",
    "text_muted": "#A0AEC0",
    "accent": "#319795",  # Subtle teal
    "accent_light": "#E6FFFA",
    "border": "#E2E8F0",
    "success": "#48BB78",
    "warning": "#ED8936",
    "error": "#F56565",
}

BAND_COLORS = {
    ScoreBand.FULL: COLORS["success"],
    ScoreBand.PARTIAL: COLORS["warning"],
    ScoreBand.NONE: COLORS["error"],
    ScoreBand.INCOMPARABLE: COLORS["text_muted"],
}


def inject_custom_css():
    """Inject custom CSS for the dashboard."""
    st.markdown(f"""
    <style>
        .stApp {{
            background-color: {COLORS['background']};
        }}

        h1, h2, h3 {{
            color: {COLORS['text_primary']} !important;
            font-weight: 600 !important;
        }}

        .pair-total {{
            font-size: 1.6rem;
            font-weight: 700;
            margin: 0.25rem 0 0.75rem;
        }}

        .question-score {{
            font-weight: 600;
            margin-bottom: 0.1rem;
        }}

        .answer-line {{
            color: {COLORS['text_secondary']};
            font-size: 0.9rem;
            margin: 0 0 0 1rem;
        }}

        .muted {{
            color: {COLORS['text_muted']};
            font-style: italic;
        }}

        #MainMenu {{visibility: hidden;}}
        footer {{visibility: hidden;}}
    </style>
    """, unsafe_allow_html=True)


# =============================================================================
# COMPONENT FUNCTIONS
# =============================================================================

@st.cache_resource
def load_repository():
    """Load and cache the configured survey."""
    config = load_config(str(CONFIG_PATH))
    survey_path = project_root / get_config_value(config, "data.survey.path")
    if not survey_path.exists():
        st.error(f"Survey data not found at {survey_path}.")
        st.stop()
    return config, load_survey(str(survey_path))


def render_percent(score: float, band: ScoreBand, text: str, css_class: str) -> None:
    color = BAND_COLORS[band]
    st.markdown(
        f'<p class="{css_class}" style="color: {color};">{round_percent(score)}% {text}</p>',
        unsafe_allow_html=True
    )


def render_total(score: float, band: ScoreBand) -> None:
    color = BAND_COLORS[band]
    st.markdown(
        f'<p class="pair-total" style="color: {color};">{format_total(score)}</p>',
        unsafe_allow_html=True
    )


def render_pair(comparison) -> None:
    """Render one user pair inside a collapsible section."""
    a, b = comparison.user_a, comparison.user_b
    title = f"{a.name} ({a.description}) ----- {b.name} ({b.description})"

    with st.expander(title):
        if comparison.status is ComparisonStatus.NO_COMMON_ANSWERS:
            st.markdown('<p class="muted">No questions answered in common</p>', unsafe_allow_html=True)
            return

        if comparison.status is ComparisonStatus.SCORED:
            render_total(comparison.aggregate, comparison.band)
        else:
            st.markdown('<p class="muted">No comparable answers in common</p>', unsafe_allow_html=True)

        for q in comparison.questions:
            if q.comparable:
                render_percent(q.score, q.band, q.question.text, "question-score")
            else:
                st.markdown(f'<p class="question-score muted">n/a {q.question.text}</p>',
                            unsafe_allow_html=True)
            st.markdown(f'<p class="answer-line"><b>{a.name}:</b> {q.answer_a}</p>', unsafe_allow_html=True)
            st.markdown(f'<p class="answer-line"><b>{b.name}:</b> {q.answer_b}</p>', unsafe_allow_html=True)


def render_overview(questions) -> None:
    """List the questions and their answer scales."""
    with st.expander("Questions"):
        for question in questions:
            st.markdown(f"**{question.text}**")
            st.caption(" → ".join(question.answers))


def render_answers(repository) -> None:
    """Raw answer records, one row per answer."""
    with st.expander("Answers"):
        st.dataframe(repository.answers_frame(), use_container_width=True, hide_index=True)


def render_distribution(report) -> None:
    stats = report.distribution_stats
    if stats is None:
        st.info("No pair could be scored.")
        return

    cols = st.columns(4)
    cols[0].metric("Scored pairs", stats.count)
    cols[1].metric("Mean", f"{stats.mean:.0f}%")
    cols[2].metric("Min", f"{stats.min:.0f}%")
    cols[3].metric("Max", f"{stats.max:.0f}%")


# =============================================================================
# MAIN APPLICATION
# =============================================================================

def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="Survey Alignment",
        page_icon="",
        layout="wide",
    )

    inject_custom_css()

    config, repository = load_repository()

    st.title("Survey Alignment")

    set_names = {qs.name: qs for qs in repository.question_sets}
    default_set = get_config_value(config, "comparison.question_set")
    options = [ALL_QUESTIONS] + list(set_names)
    default_index = 0
    for i, name in enumerate(options[1:], start=1):
        if set_names[name].set_id == default_set:
            default_index = i

    choice = st.sidebar.selectbox("Question set", options=options, index=default_index)
    question_set = set_names.get(choice)

    quantiles = get_config_value(config, "report.quantiles")
    if not valid_quantiles(quantiles):
        st.warning("Ignoring report.quantiles in the config; using the defaults.")
        quantiles = None

    comparisons = compare_all(repository, question_set)
    report = create_comparison_report(
        title=choice,
        users=repository.users,
        comparisons=comparisons,
        quantiles=quantiles
    )

    render_overview(repository.questions_in(question_set))
    render_answers(repository)
    render_distribution(report)

    st.subheader("Score matrix")
    st.dataframe(report.score_matrix().round(0), use_container_width=True)

    st.subheader("Comparisons")
    for comparison in report.comparisons:
        render_pair(comparison)


if __name__ == "__main__":
    main()
