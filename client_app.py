"""
Engineer Review Form - Claim Review Intake App

A Streamlit page where a claims engineer records a damage review, suggested
work and photos for a claim. Posts to the intake FastAPI backend.

Run with: streamlit run client_app.py
Open with ?claim_number=<claim id> to prefill the claim.
"""
import streamlit as st
import requests

from intake.form import MAX_FILES, check_files, encode_image, submit_review

# ============================================
# CONFIGURATION
# ============================================

# Default API URL (can be overridden in sidebar)
DEFAULT_API_URL = "http://localhost:8000"


def get_api_url() -> str:
    """Get the API base URL from session state."""
    return st.session_state.get("api_url", DEFAULT_API_URL)


# ============================================
# PAGE CONFIG & STYLING
# ============================================

st.set_page_config(
    page_title="Engineer Review",
    page_icon="🛠️",
    layout="centered",
    initial_sidebar_state="collapsed"
)

st.markdown("""
<style>
    .main-header {
        background: #ffffff;
        padding: 1.5rem 1.75rem;
        border-radius: 16px;
        box-shadow: 0 10px 30px rgba(15, 23, 42, 0.08);
        margin-bottom: 1.5rem;
    }

    .main-header h1 {
        margin: 0;
        font-size: 1.5rem;
        font-weight: 600;
    }

    .main-header p {
        margin: 0.5rem 0 0 0;
        color: #6b7280;
        font-size: 0.9rem;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# ============================================
# UI COMPONENTS
# ============================================

def render_header(claim_number: str):
    """Render the main header."""
    title = f"Engineer Review - Claim {claim_number}" if claim_number else "Engineer Review"
    st.markdown(f"""
    <div class="main-header">
        <h1>{title}</h1>
        <p>Review damages and suggest work for this claim.</p>
    </div>
    """, unsafe_allow_html=True)


def render_sidebar():
    """Settings sidebar with the API URL and a connection check."""
    with st.sidebar:
        st.header("⚙️ Settings")

        api_url = st.text_input(
            "API Server URL",
            value=DEFAULT_API_URL,
            help="URL of the intake FastAPI backend"
        )
        st.session_state.api_url = api_url

        if st.button("Test Connection"):
            try:
                response = requests.get(f"{api_url}/health", timeout=5)
                if response.status_code == 200:
                    st.success("✅ Connected!")
                else:
                    st.error("❌ Connection failed")
            except requests.exceptions.RequestException:
                st.error("❌ Cannot reach server")


def render_review_form(default_claim_number: str):
    """Render the engineer review form and submit it."""
    with st.form("review_form", clear_on_submit=False):
        claim_number = st.text_input(
            "Claim number *",
            value=default_claim_number,
            disabled=bool(default_claim_number)
        )

        review_of_damages = st.text_area(
            "Engineer Review of Damages *",
            placeholder="Enter your review of the damages...",
            height=150
        )

        suggested_work = st.text_area(
            "Engineer Suggested Work *",
            placeholder="Enter your suggested work...",
            height=150
        )

        photos = st.file_uploader(
            f"Images (max {MAX_FILES}, up to 4MB each)",
            type=["jpg", "jpeg", "png", "heic", "webp"],
            accept_multiple_files=True
        )

        for photo in photos or []:
            st.caption(f"{photo.name} ({photo.size / 1024 / 1024:.2f} MB)")

        submitted = st.form_submit_button(
            "Submit Review",
            use_container_width=True,
            type="primary"
        )

    if not submitted:
        return

    photos = photos or []
    problem = check_files([(p.name, p.size) for p in photos])

    if not claim_number:
        st.error("Claim number is required.")
    elif not review_of_damages.strip() or not suggested_work.strip():
        st.error("Please fill in both the review of damages and the suggested work.")
    elif problem:
        st.error(problem)
    else:
        with st.spinner("Submitting review..."):
            images = [encode_image(p.name, p.type or "", p.getvalue()) for p in photos]
            ok, message = submit_review(
                get_api_url(),
                claim_number,
                review_of_damages,
                suggested_work,
                images
            )

        if ok:
            st.success(message)
        else:
            st.error(message)


# ============================================
# MAIN APPLICATION
# ============================================

def main():
    """Main application entry point."""
    claim_number = st.query_params.get("claim_number", "")

    render_sidebar()
    render_header(claim_number)
    render_review_form(claim_number)


if __name__ == "__main__":
    main()
