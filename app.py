"""Streamlit UI for extracting import declaration (DVI) fields from PDFs."""

import streamlit as st
import json
from dotenv import load_dotenv
from dvi_extractor.export import (
    DEFAULT_ARCHIVE_NAME,
    DEFAULT_XLSX_NAME,
    build_archive,
    export_xlsx,
)
from dvi_extractor.pipeline import ExtractionPipeline
from dvi_extractor.schema import DocumentStatus, FieldColumns, ManualFlag

# Load environment variables
load_dotenv()

# Page configuration
st.set_page_config(
    page_title="Extractor DVI",
    page_icon="📄",
    layout="wide"
)

st.title("📄 Extractor DVI / AWB")
st.markdown("""
Extract import customs declaration fields from PDF files:
- **PDF text layer** read locally, no upload to external services
- **Section-scoped rules** for MRN, AWB, exporter, invoice and TARIC fields
- Editable table with **Excel** and renamed **ZIP** export
""")

STATUS_ICONS = {
    DocumentStatus.DONE: "✅",
    DocumentStatus.WARNING: "⚠️",
    DocumentStatus.ERROR: "❌",
}


@st.cache_resource
def get_pipeline() -> ExtractionPipeline:
    return ExtractionPipeline()


def table_rows(results):
    """One editor row per document, keyed by field alias."""
    rows = []
    for i, result in enumerate(results, 1):
        row = {'#': i, 'file': result.file_name}
        row.update(result.record.to_json_dict())
        rows.append(row)
    return rows


def apply_edits(results, edited_rows):
    """Push edited table rows back into the stored results."""
    aliases = [alias for _, alias, _ in FieldColumns.COLUMNS]
    updated = []
    for result, row in zip(results, edited_rows):
        changes = {alias: row.get(alias) for alias in aliases}
        updated.append(result.with_record(result.record.with_updates(**changes)))
    return updated


st.divider()

uploaded_files = st.file_uploader(
    "Choose PDF files",
    type=['pdf'],
    accept_multiple_files=True,
    help="Upload one or more DVI / MRN declaration PDFs"
)

extract_button = st.button(
    "🚀 Run Extraction",
    type="primary",
    use_container_width=True,
    disabled=not uploaded_files
)

if extract_button:
    try:
        pipeline = get_pipeline()
    except ValueError as e:
        st.error(f"Configuration error: {e}")
        st.stop()

    results = []
    sources = []
    progress = st.progress(0.0, text="Processing...")
    for i, uploaded_file in enumerate(uploaded_files, 1):
        pdf_bytes = uploaded_file.getvalue()
        result = pipeline.extract_from_bytes(pdf_bytes, file_name=uploaded_file.name)
        results.append(result)
        sources.append(pdf_bytes)
        progress.progress(i / len(uploaded_files), text=f"{i}/{len(uploaded_files)}: {uploaded_file.name}")
    progress.empty()

    st.session_state.results = results
    st.session_state.sources = sources
    st.success(f"✅ Extraction complete: {len(results)} file(s)")

if st.session_state.get('results'):
    results = st.session_state.results

    # Per-file status
    with st.expander("📈 Files", expanded=False):
        for result in results:
            icon = STATUS_ICONS[result.status]
            st.markdown(
                f"{icon} **{result.file_name}**: {len(result.warnings)} warning(s), "
                f"{result.page_count} page(s), {result.processing_time:.2f}s"
            )

    tab1, tab2, tab3 = st.tabs(["📋 Table", "⚠️ Warnings", "📄 JSON"])

    with tab1:
        column_config = {
            '#': st.column_config.NumberColumn('#', disabled=True),
            'file': st.column_config.TextColumn('Fișier', disabled=True),
            'invoiceAmount': st.column_config.NumberColumn(
                FieldColumns.get_label('invoiceAmount'), format="%.2f"
            ),
            'manualFlag': st.column_config.SelectboxColumn(
                FieldColumns.get_label('manualFlag'),
                options=[flag.value for flag in ManualFlag],
                required=True
            ),
        }
        for _, alias, label in FieldColumns.COLUMNS:
            column_config.setdefault(alias, st.column_config.TextColumn(label))

        edited_rows = st.data_editor(
            table_rows(results),
            column_config=column_config,
            hide_index=True,
            use_container_width=True,
            num_rows="fixed",
            key="results_editor"
        )

        if st.button("💾 Save edits"):
            st.session_state.results = apply_edits(results, edited_rows)
            st.rerun()

        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                label="📥 Download Excel",
                data=export_xlsx(results),
                file_name=DEFAULT_XLSX_NAME,
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                use_container_width=True
            )
        with col2:
            st.download_button(
                label="📦 Download renamed PDFs",
                data=build_archive(list(zip(results, st.session_state.sources))),
                file_name=DEFAULT_ARCHIVE_NAME,
                mime="application/zip",
                use_container_width=True
            )

    with tab2:
        any_warnings = False
        for result in results:
            if not result.warnings:
                continue
            any_warnings = True
            st.markdown(f"**{result.file_name}**")
            for warning in result.warnings:
                st.warning(warning)
        if not any_warnings:
            st.success("All fields resolved in every file.")

    with tab3:
        json_output = [result.to_dict() for result in results]
        st.json(json_output)

        json_str = json.dumps(json_output, indent=2, ensure_ascii=False, default=str)
        st.download_button(
            label="📥 Download JSON",
            data=json_str,
            file_name="extraction_result.json",
            mime="application/json"
        )

# Footer
st.divider()
st.markdown("""
<div style='text-align: center; color: gray;'>
    <small>Extractor DVI | PDF text layer only, scanned documents are not supported</small>
</div>
""", unsafe_allow_html=True)
