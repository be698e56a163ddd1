# ui/app.py
import os, time, requests, streamlit as st

API = os.getenv("API_BASE", "http://localhost:8080").rstrip("/")
POLL_SECONDS = float(os.getenv("UI_POLL_SECONDS", "0.25"))

# --- Branding ---
st.set_page_config(page_title="RPS Showdown", page_icon="✂️", layout="centered")

st.markdown("""
<style>
  .rps-score{display:flex;align-items:center;justify-content:center;gap:1.5rem;
    font-size:clamp(1.2rem,3vw,1.8rem);font-weight:700;margin:.5rem 0 1rem;}
  .rps-score .label{display:block;font-size:.8rem;font-weight:500;opacity:.75;text-align:center;}
  .rps-battle{display:grid;grid-template-columns:1fr auto 1fr;align-items:center;
    justify-items:center;gap:1rem;margin:1.5rem 0;}
  .rps-card{display:flex;flex-direction:column;align-items:center;padding:1rem 1.5rem;
    border:2px solid var(--primary-color);border-radius:.75rem;min-width:120px;}
  .rps-card .emoji{font-size:3.5rem;line-height:1.2;}
  .rps-card.thinking{opacity:.6;border-style:dashed;}
  .rps-center{font-size:1.4rem;font-weight:700;}
  .rps-result{text-align:center;font-size:1.6rem;font-weight:700;margin:1rem 0;}
</style>
""", unsafe_allow_html=True)


def fetch_json(path: str):
    """GET from the API, returning None when it is unreachable"""
    try:
        r = requests.get(f"{API}{path}", timeout=5)
        return r.json() if r.ok else None
    except requests.RequestException:
        return None


def post_json(path: str, payload: dict | None = None):
    """POST to the API. Conflicts mean the screen is stale, so just refresh."""
    try:
        r = requests.post(f"{API}{path}", json=payload or {}, timeout=5)
    except requests.RequestException:
        return None
    if r.status_code == 409:
        return fetch_json("/state")
    return r.json() if r.ok else None


def card_html(card: dict) -> str:
    cls = "rps-card thinking" if card.get("thinking") else "rps-card"
    return f'<div class="{cls}"><span class="emoji">{card["emoji"]}</span><span>{card["label"]}</span></div>'


view = fetch_json("/state")
if view is None:
    st.title("RPS Showdown")
    st.error(f"Game server unavailable at {API}")
    st.stop()

rules = fetch_json("/rules") or {}

st.title("RPS Showdown")
if rules.get("caption"):
    st.caption(rules["caption"])

# ---------- score board ----------
score = view["score"]
col_score, col_reset = st.columns([4, 1])
with col_score:
    st.markdown(
        f'<div class="rps-score">'
        f'<div><span class="label">You</span>{score["player"]}</div>'
        f'<div>-</div>'
        f'<div><span class="label">PC</span>{score["computer"]}</div>'
        f'</div>',
        unsafe_allow_html=True,
    )
with col_reset:
    if st.button("🔄", help="Reset score", key="reset"):
        st.session_state["confirm_reset"] = True

if st.session_state.get("confirm_reset"):
    st.warning(view["actions"]["reset_score"]["confirm_prompt"])
    col_yes, col_no = st.columns(2)
    if col_yes.button("Yes, reset", key="reset_yes", use_container_width=True):
        post_json("/reset_score", {"confirm": True})
        st.session_state["confirm_reset"] = False
        st.rerun()
    if col_no.button("Cancel", key="reset_no", use_container_width=True):
        st.session_state["confirm_reset"] = False
        st.rerun()

# ---------- main game area ----------
if view["phase"] == "idle":
    st.subheader(view["prompt"])
    options = view["actions"]["select_move"]
    cols = st.columns(len(options))
    for col, option in zip(cols, options):
        with col:
            if st.button(f'{option["emoji"]} {option["label"]}', key=f'move_{option["move"]}', use_container_width=True):
                post_json("/select", {"move": option["move"]})
                st.rerun()
else:
    st.markdown(
        f'<div class="rps-battle">'
        f'{card_html(view["player_card"])}'
        f'<div class="rps-center">{view["center"]}</div>'
        f'{card_html(view["computer_card"])}'
        f'</div>',
        unsafe_allow_html=True,
    )

    if view["phase"] == "pending" and not st.session_state.get("confirm_reset"):
        # The reveal happens server-side; poll until it lands
        time.sleep(POLL_SECONDS)
        st.rerun()

    result = view["result"]
    if result:
        st.markdown(f'<div class="rps-result">{result["message"]}</div>', unsafe_allow_html=True)
    if view["actions"]["play_again"]:
        if st.button("Play again", key="play_again", use_container_width=True):
            post_json("/play_again")
            st.rerun()
