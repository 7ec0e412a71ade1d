"""
Member Portal for the Emergency Relief DAO

A Streamlit dashboard providing:
- Fund balance and claim overview with status filtering
- Claim detail with vote tally and audit timeline
- Voting and finalization controls
- Claim submission, deposits and ownership transfer
"""
import html

import streamlit as st
import requests

# Configuration
DEFAULT_API_URL = "http://localhost:8000"

# Page configuration
st.set_page_config(
    page_title="Relief DAO Portal",
    page_icon="🤝",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .timeline-item {
        padding: 10px 15px;
        border-left: 3px solid #4CAF50;
        margin-left: 20px;
        margin-bottom: 10px;
        background: #f8f9fa;
        border-radius: 0 8px 8px 0;
    }
    .timeline-item.vote {border-left-color: #2196F3;}
    .timeline-item.final {border-left-color: #7b1fa2;}
    .status-badge {
        padding: 4px 12px;
        border-radius: 12px;
        font-size: 0.85rem;
        font-weight: 500;
    }
    .status-pending {background: #fff3e0; color: #ef6c00;}
    .status-approved {background: #e8f5e9; color: #2e7d32;}
    .status-rejected {background: #ffebee; color: #c62828;}
    .status-expired {background: #eceff1; color: #455a64;}
</style>
""", unsafe_allow_html=True)


def get_api_url() -> str:
    return st.session_state.get("api_url", DEFAULT_API_URL)


def call_headers() -> dict:
    """Caller principal and block height for mutating calls."""
    return {
        "X-Caller": st.session_state.get("caller", ""),
        "X-Block-Height": str(st.session_state.get("block_height", 0)),
    }


def error_message(response: requests.Response) -> str:
    try:
        error = response.json()["error"]
        return f"{error['code']}: {error['message']}"
    except (ValueError, KeyError, TypeError):
        return f"HTTP {response.status_code}"


def get_summary():
    """Fetch DAO summary from API."""
    try:
        response = requests.get(f"{get_api_url()}/dao/summary", timeout=5)
        if response.status_code == 200:
            return response.json()
    except requests.exceptions.RequestException:
        pass
    return None


def get_claim_detail(claim_id: int):
    """Fetch detailed claim information."""
    try:
        response = requests.get(f"{get_api_url()}/claims/{claim_id}", timeout=5)
        if response.status_code == 200:
            return response.json()["claim"]
    except requests.exceptions.RequestException:
        pass
    return None


def post(path: str, payload: dict | None = None, method: str = "post"):
    """Send a mutating call; returns (success, body or error text)."""
    try:
        response = requests.request(
            method.upper(),
            f"{get_api_url()}{path}",
            json=payload,
            headers=call_headers(),
            timeout=5
        )
    except requests.exceptions.RequestException as e:
        return False, str(e)
    if response.status_code in (200, 201):
        return True, response.json()
    return False, error_message(response)


def show_result(ok: bool, result):
    if ok:
        st.success(result["message"])
    else:
        st.error(result)


def render_status_badge(status: str) -> str:
    return f'<span class="status-badge status-{status}">{status.upper()}</span>'


def timeline_item_html(entry: dict) -> str:
    """One audit entry as timeline markup; caller-supplied text is escaped."""
    action = entry.get("action", "")
    if action.startswith("VOTED"):
        type_class = "vote"
    elif action == "SUBMITTED":
        type_class = ""
    else:
        type_class = "final"

    return f"""
    <div class="timeline-item {type_class}">
        <strong>[block {entry.get('block_height')}] {html.escape(action)}</strong><br>
        <small>By: {html.escape(str(entry.get('actor', '')))}</small><br>
        {html.escape(entry.get('detail', ''))}
    </div>
    """


def render_timeline(claim: dict):
    """Render the claim's audit log."""
    st.subheader("📊 Timeline")

    for entry in claim.get("audit_log", []):
        st.markdown(timeline_item_html(entry), unsafe_allow_html=True)


def render_voting(claim: dict):
    """Render vote tally and controls."""
    st.subheader("🗳️ Voting")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Yes", claim.get("yes_votes", 0))
    with col2:
        st.metric("No", claim.get("no_votes", 0))
    with col3:
        st.metric("Deadline", claim.get("voting_deadline", 0))

    if claim.get("status") != "pending":
        st.info("Voting is over for this claim")
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("👍 Vote Yes", type="primary", use_container_width=True):
            ok, result = post(f"/claims/{claim['id']}/votes", {"vote": True})
            show_result(ok, result)
    with col2:
        if st.button("👎 Vote No", use_container_width=True):
            ok, result = post(f"/claims/{claim['id']}/votes", {"vote": False})
            show_result(ok, result)
    with col3:
        if st.button("🏁 Finalize", use_container_width=True):
            ok, result = post(f"/claims/{claim['id']}/finalize")
            if ok:
                st.success(f"{result['status'].upper()}: {result['message']}")
            else:
                st.error(result)


def render_submit_form():
    st.subheader("📝 Submit a Claim")
    with st.form("submit_claim"):
        amount = st.number_input("Amount", min_value=0, step=100, value=1000)
        category = st.text_input("Category", value="medical")
        description = st.text_area("Description")
        if st.form_submit_button("Submit"):
            ok, result = post("/claims/", {
                "amount": int(amount),
                "description": description,
                "category": category
            })
            show_result(ok, result)


def render_admin_forms(summary: dict):
    st.subheader("🏦 Fund & Ownership")
    st.markdown(f"**Current owner:** `{summary.get('dao_owner')}`")

    with st.form("deposit"):
        amount = st.number_input("Deposit amount", min_value=0, step=1000, value=5000)
        if st.form_submit_button("Deposit"):
            ok, result = post("/fund/deposits", {"amount": int(amount)})
            show_result(ok, result)

    with st.form("transfer_owner"):
        new_owner = st.text_input("New owner principal")
        if st.form_submit_button("Transfer ownership"):
            ok, result = post("/dao/owner", {"new_owner": new_owner}, method="put")
            show_result(ok, result)


def main():
    """Main portal application."""
    st.title("🤝 Emergency Relief DAO")

    with st.sidebar:
        st.header("⚙️ Execution Context")
        st.session_state.api_url = st.text_input("API URL", value=get_api_url())
        st.session_state.caller = st.text_input("Caller principal", value=st.session_state.get("caller", "deployer"))
        st.session_state.block_height = st.number_input(
            "Block height", min_value=0, step=1, value=st.session_state.get("block_height", 0)
        )

        if st.button("🔄 Refresh", use_container_width=True):
            st.rerun()

        summary = get_summary()
        if summary is None:
            st.error("⚠️ Cannot connect to API. Is the server running?")
            st.code("uvicorn app.main:app --reload")
            return

        st.markdown("---")
        status_counts = summary.get("status_counts", {})
        selected_status = st.selectbox(
            "Status",
            options=["all"] + list(status_counts.keys()),
            format_func=lambda x: f"{x} ({status_counts.get(x, summary.get('total_claims', 0))})"
        )

        claims = summary.get("claims", [])
        if selected_status != "all":
            claims = [c for c in claims if c["status"] == selected_status]

        for claim in claims:
            if st.button(
                f"#{claim['id']} {claim['category']} - {claim['amount']:,}",
                key=f"claim_{claim['id']}",
                use_container_width=True,
                help=f"Beneficiary: {claim['beneficiary']}\nStatus: {claim['status']}"
            ):
                st.session_state.selected_claim = claim["id"]

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Fund balance", f"{summary.get('fund_balance', 0):,}")
    with col2:
        st.metric("Paid out", f"{summary.get('total_paid_out', 0):,}")
    with col3:
        st.metric("Claims", summary.get("total_claims", 0))
    with col4:
        st.metric("Quorum", summary.get("quorum", 0))

    st.markdown("---")

    if "selected_claim" in st.session_state:
        claim = get_claim_detail(st.session_state.selected_claim)

        if claim:
            col1, col2, col3 = st.columns([2, 1, 1])
            with col1:
                st.markdown(f"### Claim #{claim['id']} · {claim.get('category')}")
            with col2:
                st.markdown(f"**Amount:** {claim.get('amount', 0):,}")
            with col3:
                st.markdown(render_status_badge(claim.get("status", "pending")), unsafe_allow_html=True)

            st.markdown(f"**Beneficiary:** `{claim.get('beneficiary')}`")
            st.write(claim.get("description", ""))

            tab1, tab2 = st.tabs(["🗳️ Voting", "📊 Timeline"])
            with tab1:
                render_voting(claim)
            with tab2:
                render_timeline(claim)
        else:
            st.error("Could not load claim details")
    else:
        st.info("👈 Select a claim from the sidebar to view details")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        render_submit_form()
    with col2:
        render_admin_forms(summary)


if __name__ == "__main__":
    main()
