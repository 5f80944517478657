"""
Bid Evaluation Demo

A Streamlit app for scoring one bid against a weighted rubric, comparing it with
competing bids, recording a recommendation and exporting the report.

Run with: streamlit run demos/streamlit_evaluation_demo.py
"""

import json
from io import BytesIO

import altair as alt
import streamlit as st
import yaml

from bid_scoring import (
    Bid,
    ComparisonBid,
    Evaluation,
    EvaluationSaveError,
    Recommendation,
    RiskAssessment,
    Rubric,
    compare_bids,
    export_report,
    score_breakdown,
)
from bid_scoring.evaluation import NOTE_KINDS

# === Display mappings ===

BAND_COLORS = {"high": "#10b981", "medium": "#f59e0b", "low": "#ef4444"}

RECOMMENDATION_LABELS = {
    None: "Select Recommendation",
    Recommendation.AWARD: "Award Contract",
    Recommendation.NEGOTIATE: "Negotiate & Award",
    Recommendation.CLARIFY: "Seek Clarification",
    Recommendation.REJECT: "Reject Bid",
    Recommendation.RESERVE: "Place on Reserve List",
}

RISK_ASSESSMENT_LABELS = {
    RiskAssessment.LOW: "Low Risk",
    RiskAssessment.MEDIUM: "Medium Risk",
    RiskAssessment.HIGH: "High Risk",
    RiskAssessment.VERY_HIGH: "Very High Risk",
}


# === Sample data ===

def get_sample_bid():
    return Bid.from_dict({
        "id": "BID-2024-001",
        "rfqNumber": "RFQ-2024-015",
        "rfqTitle": "Laptop Procurement Q1 2024",
        "supplier": {"id": "SUPP-001", "name": "TechCorp Inc.", "rating": 4.8,
                     "category": "Electronics", "yearsInBusiness": 12,
                     "financialRating": "A+"},
        "amount": 125000,
        "currency": "USD",
        "items": [
            {"name": "Dell XPS 13", "quantity": 50, "unitPrice": 1200,
             "specifications": "Intel i7, 16GB RAM, 512GB SSD"},
            {"name": "Dell XPS 15", "quantity": 25, "unitPrice": 1800,
             "specifications": "Intel i9, 32GB RAM, 1TB SSD"},
            {"name": "Extended Warranty", "quantity": 75, "unitPrice": 200,
             "specifications": "3-year on-site support"},
        ],
        "notes": "Includes extended warranty and on-site support. Bulk discount applied.",
    })


def get_sample_comparison():
    return [
        ComparisonBid.from_dict({"id": "BID-2024-003",
                                 "supplier": {"name": "CompuGlobal Ltd", "rating": 4.2},
                                 "amount": 118500, "overallScore": 85, "status": "submitted"}),
        ComparisonBid.from_dict({"id": "BID-2024-007",
                                 "supplier": {"name": "IT Solutions Co", "rating": 4.5},
                                 "amount": 127800, "overallScore": 88, "status": "submitted"}),
    ]


# === Session state helpers ===

def _persist(snapshot):
    st.session_state.saved_snapshots.append(snapshot)


def _on_complete(snapshot):
    st.session_state.completed = snapshot


def init_session_state():
    if "bid" not in st.session_state:
        st.session_state.bid = get_sample_bid()
    if "comparison" not in st.session_state:
        st.session_state.comparison = get_sample_comparison()
    if "saved_snapshots" not in st.session_state:
        st.session_state.saved_snapshots = []
    if "completed" not in st.session_state:
        st.session_state.completed = None
    if "evaluation" not in st.session_state:
        st.session_state.evaluation = Evaluation(
            st.session_state.bid.id,
            persist=_persist,
            on_complete=_on_complete,
        )


# === Sidebar ===

def render_sidebar():
    evaluation = st.session_state.evaluation

    st.sidebar.header("Rubric")
    uploaded = st.sidebar.file_uploader("Load rubric (YAML or JSON)", type=["yaml", "yml", "json"])
    if uploaded is not None and st.sidebar.button("Apply rubric"):
        try:
            if uploaded.name.endswith(".json"):
                config = json.loads(uploaded.getvalue())
            else:
                config = yaml.safe_load(uploaded.getvalue())
            rubric = Rubric.from_config(config.get("rubric", config), validate_weights=True)
        except (ValueError, KeyError, AttributeError, yaml.YAMLError) as e:
            st.sidebar.error(f"Invalid rubric: {e}")
        else:
            st.session_state.evaluation = Evaluation(
                st.session_state.bid.id, evaluator=evaluation.evaluator, rubric=rubric,
                persist=_persist, on_complete=_on_complete,
            )
            st.rerun()

    st.sidebar.download_button(
        "Download rubric (JSON)",
        data=json.dumps({"rubric": evaluation.rubric.to_config()}, indent=2),
        file_name="rubric.json",
        mime="application/json",
    )

    st.sidebar.divider()
    evaluation.evaluator = st.sidebar.text_input("Evaluator", value=evaluation.evaluator)
    evaluation.evaluation_date = st.sidebar.date_input(
        "Evaluation date", value=evaluation.evaluation_date
    )


# === Tabs ===

def render_scoring_tab(evaluation):
    for category in evaluation.rubric:
        with st.expander(f"{category.label} ({category.weight:g}%)", expanded=True):
            c1, c2 = st.columns(2)

            for sub in category.sub_criteria.values():
                s1, s2 = st.columns([1, 2])
                with s1:
                    value = st.number_input(
                        f"{sub.label} (max {sub.max:g})",
                        min_value=0.0,
                        max_value=float(sub.max),
                        value=float(sub.score),
                        step=1.0,
                        key=f"score_{category.name}_{sub.name}",
                    )
                    evaluation.update_sub_criterion_score(category.name, sub.name, value)
                with s2:
                    comment = st.text_input(
                        "Comment", value=sub.comment,
                        key=f"comment_{category.name}_{sub.name}",
                    )
                    evaluation.update_sub_criterion_comment(category.name, sub.name, comment)

            comments = st.text_area(
                f"Overall {category.label} Comments", value=category.comments,
                key=f"category_comment_{category.name}",
            )
            evaluation.update_category_comment(category.name, comments)

            c1.metric("Category Score", f"{evaluation.category_score(category.name):.1f}%")
            c2.metric("Weighted Score", f"{evaluation.weighted_score(category.name):.1f}")


def render_comparison_tab(evaluation):
    table = compare_bids(st.session_state.bid, evaluation.overall_score,
                         st.session_state.comparison)
    st.dataframe(
        table[["bid_id", "supplier", "amount", "overall_score", "rating",
               "risk_level", "price_difference", "status"]],
        hide_index=True,
        use_container_width=True,
    )

    chart_df = table.assign(
        label=table["supplier"].where(~table["is_current"], table["supplier"] + " (current)")
    )
    chart = (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("label:N", title=None, sort="-y"),
            y=alt.Y("overall_score:Q", title="Score", scale=alt.Scale(domain=[0, 100])),
            color=alt.condition(
                alt.datum.is_current, alt.value("#4e79a7"), alt.value("#bab0ac")
            ),
            tooltip=["supplier", "amount", "overall_score", "rating"],
        )
        .properties(title="Score Comparison", height=300)
    )
    st.altair_chart(chart, use_container_width=True)


def _render_note_list(evaluation, kind):
    st.markdown(f"**{kind.title()}**")
    notes = getattr(evaluation, kind)
    for index, text in enumerate(list(notes)):
        c1, c2 = st.columns([6, 1])
        with c1:
            value = st.text_input(f"{kind} {index + 1}", value=text,
                                  key=f"{kind}_{index}_{len(notes)}",
                                  label_visibility="collapsed")
            evaluation.update_item(kind, index, value)
        with c2:
            if st.button("Remove", key=f"remove_{kind}_{index}"):
                evaluation.remove_item(kind, index)
                st.rerun()
    if st.button(f"Add {kind[:-1] if kind != 'weaknesses' else 'weakness'}",
                 key=f"add_{kind}"):
        evaluation.add_item(kind)
        st.rerun()


def render_recommendation_tab(evaluation):
    options = list(RECOMMENDATION_LABELS)
    evaluation.recommendation = st.selectbox(
        "Recommendation", options,
        index=options.index(evaluation.recommendation),
        format_func=RECOMMENDATION_LABELS.get,
    )
    evaluation.justification = st.text_area(
        "Justification", value=evaluation.justification,
        placeholder="Provide detailed justification for your recommendation...",
    )
    risk_options = list(RISK_ASSESSMENT_LABELS)
    evaluation.risk_assessment = st.selectbox(
        "Risk Assessment", risk_options,
        index=risk_options.index(evaluation.risk_assessment),
        format_func=RISK_ASSESSMENT_LABELS.get,
    )

    for kind in NOTE_KINDS:
        _render_note_list(evaluation, kind)


def render_summary_tab(evaluation):
    breakdown = score_breakdown(evaluation.rubric)
    chart = (
        alt.Chart(breakdown)
        .mark_bar()
        .encode(
            x=alt.X("category_score:Q", title="Category Score (%)",
                    scale=alt.Scale(domain=[0, 100])),
            y=alt.Y("category:N", sort=None, title=None),
            color=alt.Color("band:N",
                            scale=alt.Scale(domain=list(BAND_COLORS),
                                            range=list(BAND_COLORS.values())),
                            legend=None),
            tooltip=["category", "weight",
                     alt.Tooltip("category_score:Q", format=".1f"),
                     alt.Tooltip("weighted_score:Q", format=".1f")],
        )
        .properties(title="Score Breakdown", height=alt.Step(40))
    )
    st.altair_chart(chart, use_container_width=True)

    output = BytesIO()
    export_report(evaluation, output, bid=st.session_state.bid,
                  comparison=st.session_state.comparison)
    st.download_button("Download Report (Excel)", data=output.getvalue(),
                       file_name=f"evaluation_{evaluation.bid_id}.xlsx",
                       mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")


def render_header(evaluation):
    bid = st.session_state.bid
    rating = evaluation.rating
    risk = evaluation.risk_level

    st.subheader(f"{bid.rfq_title}")
    st.caption(f"{bid.id} • {bid.supplier.name} • "
               f"⭐ {bid.supplier.rating} • {bid.supplier.financial_rating} Rating")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Bid Amount", f"{bid.currency} {bid.amount:,.0f}")
    c2.metric("Overall Score", f"{evaluation.overall_score:.1f} / 100")
    c3.metric("Rating", f"{rating.icon} {rating.label}")
    c4.metric("Risk Level", risk.level, help=risk.description)


def render_actions(evaluation):
    c1, c2 = st.columns(2)
    with c1:
        if st.button("Save Draft", disabled=evaluation.saving):
            _run_save(evaluation.save_draft, "saved")
    with c2:
        if st.button("Complete Evaluation", type="primary", disabled=evaluation.saving):
            _run_save(evaluation.complete, "completed")

    if st.session_state.completed:
        st.success(f"Evaluation completed with score "
                   f"{st.session_state.completed['overall_score']:.1f}")


def _run_save(action, verb):
    try:
        action()
    except EvaluationSaveError as e:
        st.error(str(e))
    else:
        st.toast(f"Evaluation {verb} successfully!")


# === Main ===

def main():
    st.set_page_config(page_title="Bid Evaluation", page_icon="\U0001f4cb", layout="wide")
    init_session_state()
    evaluation = st.session_state.evaluation

    st.title("Bid Evaluation")
    render_sidebar()
    # Filled after the tabs so the scores include this run's widget edits
    header = st.container()

    tabs = st.tabs(["Scoring", "Comparison", "Recommendation", "Summary"])
    with tabs[0]:
        render_scoring_tab(evaluation)
    with tabs[1]:
        render_comparison_tab(evaluation)
    with tabs[2]:
        render_recommendation_tab(evaluation)
    with tabs[3]:
        render_summary_tab(evaluation)

    with header:
        render_header(evaluation)

    st.divider()
    render_actions(evaluation)


if __name__ == "__main__":
    main()
