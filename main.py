from __future__ import annotations
import streamlit as st
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
import io

from post_summarizer.budget import build_summary_budget, LENGTH_PREFERENCES, DEFAULT_PREFERENCE
from post_summarizer.preprocessing import preprocess_text, sanitize_input_text
from post_summarizer.features import compute_term_stats, desired_sentence_count
from post_summarizer.scoring import score_sentences, rank_sentences
from post_summarizer.selection import select_sentences
from post_summarizer.summarize import summarize, generate_summary
from post_summarizer.sources import generate_default_title, load_text


def _preview(text: str, n: int = 80) -> str:
    return text[:n] + "..." if len(text) > n else text


def draw_score_chart(scored, selected_indices):
    """Bar chart of sentence scores, selected sentences highlighted."""
    fig, ax = plt.subplots(figsize=(12, 4))
    labels = [f"S{e.index+1}" for e in scored]
    values = [e.score for e in scored]
    colors = ['orange' if e.index in selected_indices else 'lightblue' for e in scored]
    ax.bar(labels, values, color=colors)

    # Paragraph boundaries
    for prev, cur in zip(scored, scored[1:]):
        if cur.paragraph != prev.paragraph:
            ax.axvline(cur.index - 0.5, color='gray', linestyle='--', alpha=0.5)

    ax.set_title("Sentence Scores (orange = selected)", fontsize=14, fontweight='bold')
    ax.set_ylabel("Score")
    plt.tight_layout()

    buf = io.BytesIO()
    plt.savefig(buf, format='png', dpi=150, bbox_inches='tight')
    buf.seek(0)
    plt.close()
    return buf


def create_sidebar_controls():
    """Create sidebar controls for parameters."""
    st.sidebar.header("Parameters")
    options = list(LENGTH_PREFERENCES)
    preference = st.sidebar.selectbox(
        "Length preference",
        options,
        index=options.index(DEFAULT_PREFERENCE),
        help="Coarse summary length; resolved into character and sentence budgets"
    )
    override = st.sidebar.checkbox("Override length budget", value=False)
    min_length = max_length = None
    if override:
        max_length = st.sidebar.number_input("Max length (chars)", min_value=30, max_value=560, value=200, step=10)
        min_length = st.sidebar.number_input("Min length (chars)", min_value=30, max_value=550, value=120, step=10)

    st.sidebar.header("Debug Options")
    sanitize = st.sidebar.checkbox("Sanitize input", value=True, help="Apply the same cleanup as the HTTP service")
    debug_mode = st.sidebar.checkbox("Enable Debug Mode", value=True, help="Show detailed pipeline steps")

    return preference, min_length, max_length, sanitize, debug_mode


def debug_pipeline(text: str, budget):
    """Run the pipeline with detailed debugging information."""

    # Step 1: Segmentation
    st.header("🔧 Step 1: Segmentation & Tokenization")
    with st.expander("Segmentation Details", expanded=True):
        st.write("**Running:** Paragraph split, sentence split, list-marker merge, stop-word removal")

        with st.spinner("Processing text..."):
            doc = preprocess_text(text)

        if not doc.sentences:
            st.warning("No sentences found - summary falls back to a truncated prefix")
            return summarize(text, budget)

        st.success(f"✅ Found {len(doc.sentences)} sentences in {doc.paragraph_count} paragraphs")

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Paragraphs", doc.paragraph_count)
            st.metric("Sentences", len(doc.sentences))
        with col2:
            total_tokens = sum(len(s.tokens) for s in doc.sentences)
            st.metric("Total Words (original)", len(text.split()))
            st.metric("Scoring Tokens", total_tokens)
        with col3:
            st.metric("Unique Terms", len({t for s in doc.sentences for t in s.tokens}))

        sentences_df = pd.DataFrame([{
            "Sentence #": s.idx + 1,
            "Paragraph": s.paragraph + 1,
            "Text": _preview(s.text),
            "Chars": len(s.text),
            "Tokens": ", ".join(s.tokens[:8]) + ("..." if len(s.tokens) > 8 else ""),
        } for s in doc.sentences])
        st.dataframe(sentences_df, use_container_width=True)

    # Step 2: Term statistics
    st.header("📊 Step 2: Term Frequency & Rarity")
    with st.expander("Term Statistics", expanded=False):
        stats = compute_term_stats(doc)
        desired = desired_sentence_count(doc, stats, budget)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Avg Sentence Chars", f"{stats.avg_chars:.1f}")
        with col2:
            st.metric("Avg Tokens/Sentence", f"{stats.avg_tokens:.1f}")
        with col3:
            st.metric("Desired Sentences", desired)

        if not stats.weights:
            st.info("Single sentence - rarity weights default to 1.0")
        terms_df = pd.DataFrame([{
            "Term": term,
            "Frequency": freq,
            "Sentences": stats.sentence_counts.get(term, 0),
            "Rarity": f"{stats.weights.get(term, 1.0):.4f}",
        } for term, freq in sorted(stats.frequency.items(), key=lambda x: (-x[1], x[0]))])
        st.dataframe(terms_df, use_container_width=True, height=250)

    # Step 3: Scoring
    st.header("🎯 Step 3: Sentence Scoring")
    with st.expander("Scoring Details", expanded=True):
        scored = score_sentences(doc, stats)
        ranked = rank_sentences(scored)
        rank_of = {e.index: r for r, e in enumerate(ranked, start=1)}

        scores = np.array([e.score for e in scored])
        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Max Score", f"{scores.max():.3f}")
        with col2:
            st.metric("Mean Score", f"{np.mean(scores):.3f}")
        with col3:
            st.metric("Std Score", f"{np.std(scores):.3f}")

        if not scores.any():
            st.warning("All scores are zero - ranking keeps reading order")

        scoring_df = pd.DataFrame([{
            "Sentence #": e.index + 1,
            "Paragraph": e.paragraph + 1,
            "Score": f"{e.score:.3f}",
            "Rank": rank_of[e.index],
            "Text Preview": _preview(e.sentence),
        } for e in scored])
        st.dataframe(scoring_df, use_container_width=True)

    # Step 4: Selection
    st.header("📝 Step 4: Selection & Assembly")
    with st.expander("Selection Details", expanded=True):
        selected = select_sentences(ranked, doc.paragraph_count, desired, budget.sentence_count_min)
        selected_indices = {e.index for e in selected}
        summary = generate_summary(selected, ranked, budget, text)

        try:
            st.image(draw_score_chart(scored, selected_indices), caption="Sentence scores", use_column_width=True)
        except Exception as e:
            st.error(f"Could not generate score chart: {str(e)}")

        best_in_paragraph = {}
        for e in ranked:
            best_in_paragraph.setdefault(e.paragraph, e.index)

        selection_df = pd.DataFrame([{
            "Sentence #": e.index + 1,
            "Score": f"{e.score:.3f}",
            "Selected": "✅" if e.index in selected_indices else "❌",
            "Reason": "Paragraph coverage" if e.index in selected_indices and best_in_paragraph[e.paragraph] == e.index
                      else "Ranked fill" if e.index in selected_indices
                      else "Not selected",
            "In Summary": "✅" if e.sentence in summary else "—",
            "Text": e.sentence,
        } for e in scored])
        st.dataframe(selection_df, use_container_width=True)

        col1, col2, col3 = st.columns(3)
        with col1:
            st.metric("Budget", f"{budget.min_length}-{budget.max_length}")
        with col2:
            st.metric("Selected Sentences", len(selected))
        with col3:
            st.metric("Summary Length", len(summary))

    return summary


def main():
    st.title("Post Summarizer")
    st.write("Upload or paste text to generate an extractive summary")

    preference, min_length, max_length, sanitize, debug_mode = create_sidebar_controls()

    uploaded_file = st.file_uploader(
        "Choose a text file",
        type=['txt', 'rtf', 'md'],
        help="Upload a text file to summarize (supports .txt, .rtf, .md formats)"
    )

    if uploaded_file is not None:
        text = load_text(uploaded_file.name, uploaded_file.read())
        st.subheader(generate_default_title(uploaded_file.name))
        st.text_area("Content", text, height=200, disabled=True)
    else:
        text = st.text_area("Text", "", height=200)

    if st.button("Generate Summary", type="primary"):
        if sanitize:
            text = sanitize_input_text(text)
        budget = build_summary_budget(len(text), preference, min_length=min_length, max_length=max_length)
        try:
            if debug_mode:
                st.markdown("---")
                st.title("🔍 Pipeline Debug Mode")
                result = debug_pipeline(text, budget)
            else:
                with st.spinner("Generating summary..."):
                    result = summarize(text, budget)

            st.markdown("---")
            st.header("📋 Final Summary")
            st.text_area("Generated Summary", result, height=150, disabled=True)

            col1, col2, col3 = st.columns(3)
            with col1:
                st.metric("Original Length", len(text))
            with col2:
                st.metric("Summary Length", len(result))
            with col3:
                compression = len(result) / len(text) if text and result else 0
                st.metric("Actual Compression", f"{compression:.2%}")

        except Exception as e:
            st.error(f"Error generating summary: {str(e)}")
            st.exception(e)


if __name__ == "__main__":
    main()
