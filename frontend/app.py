import os
from datetime import date, timedelta

import requests
import streamlit as st

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")


def _headers() -> dict:
    token = st.session_state.get("token")
    return {"Authorization": f"Bearer {token}"} if token else {}


def api(method: str, path: str, **kwargs) -> dict | list:
    resp = requests.request(
        method, f"{BACKEND_URL}/api{path}", headers=_headers(), timeout=15, **kwargs
    )
    if resp.status_code >= 400:
        detail = resp.json().get("detail") if resp.content else resp.reason
        raise RuntimeError(f"{resp.status_code}: {detail}")
    return resp.json() if resp.content else {}


def money(value: float) -> str:
    return f"${value:,.0f}"


st.set_page_config(page_title="Tourism", layout="wide")
st.title("Discover your next destination")
st.caption("Backend: FastAPI | UI: Streamlit | Payments: Stripe")

# --- session ---------------------------------------------------------------

user = st.session_state.get("user")
with st.sidebar:
    if user:
        st.markdown(f"Signed in as **{user['username']}**")
        if st.button("Log out"):
            st.session_state.pop("token", None)
            st.session_state.pop("user", None)
            st.rerun()
    else:
        mode = st.radio("Account", ["Log in", "Register"], horizontal=True)
        with st.form("auth_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            if mode == "Register":
                username = st.text_input("Username")
                first_name = st.text_input("First name")
                last_name = st.text_input("Last name")
            submitted = st.form_submit_button(mode)
        if submitted:
            try:
                if mode == "Register":
                    api(
                        "POST",
                        "/register",
                        json={
                            "email": email,
                            "password": password,
                            "username": username,
                            "first_name": first_name,
                            "last_name": last_name,
                        },
                    )
                session = api("POST", "/login", json={"email": email, "password": password})
                st.session_state["token"] = session["access_token"]
                st.session_state["user"] = session["user"]
                st.rerun()
            except Exception as exc:  # noqa: BLE001
                st.error(str(exc))

    page = st.radio("Go to", ["Explore", "Checkout", "Dashboard", "Admin"])

# --- pages -----------------------------------------------------------------

if page == "Explore":
    query = st.text_input("Search destinations", placeholder="Beaches, Japan, museums...")
    category = st.selectbox(
        "Category", ["all", "adventure", "luxury", "culture", "beaches", "historical"]
    )
    try:
        if query:
            destinations = api("POST", "/search", json={"query": query})
        elif category != "all":
            destinations = api("GET", "/destinations", params={"category": category})
        else:
            destinations = api("GET", "/destinations")
    except Exception as exc:  # noqa: BLE001
        st.error(f"Failed to load destinations: {exc}")
        destinations = []

    for dest in destinations:
        with st.container(border=True):
            cols = st.columns([1, 2])
            if dest["images"]:
                cols[0].image(dest["images"][0])
            cols[1].subheader(f"{dest['name']}, {dest['country']}")
            cols[1].write(dest["description"])
            cols[1].markdown(
                f"{money(dest['price'])} per traveler | rating {dest['rating']} | "
                f"{dest['duration']} | best season: {dest['best_season']}"
            )
            if user and cols[1].button("Save to wishlist", key=f"wish-{dest['id']}"):
                try:
                    api("POST", "/wishlist", json={"destination_id": dest["id"]})
                    st.success("Saved")
                except Exception as exc:  # noqa: BLE001
                    st.error(str(exc))

elif page == "Checkout":
    if not user:
        st.info("Log in to book a trip.")
        st.stop()
    destinations = api("GET", "/destinations")
    by_name = {d["name"]: d for d in destinations}
    with st.form("checkout_form"):
        name = st.selectbox("Destination", list(by_name))
        travelers = st.number_input("Travelers", min_value=1, max_value=20, value=2)
        start_date = st.date_input("Start date", value=date.today() + timedelta(days=30))
        end_date = st.date_input("End date", value=date.today() + timedelta(days=37))
        contact_email = st.text_input("Contact email", value=user["email"])
        contact_phone = st.text_input("Contact phone")
        special_requests = st.text_area("Special requests", height=80)
        submitted = st.form_submit_button("Book")

    if submitted:
        dest = by_name[name]
        payload = {
            "destination_id": dest["id"],
            "travelers": int(travelers),
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "contact_email": contact_email,
            "contact_phone": contact_phone,
            "special_requests": special_requests or None,
        }
        try:
            intent = api("POST", "/create-payment-intent", json=payload)
            payload["payment_intent_id"] = intent["payment_intent_id"]
            st.info(f"Payment of {money(intent['amount'])} initiated with the processor.")
        except Exception as exc:  # noqa: BLE001
            st.warning(f"Payment not started ({exc}); booking will stay pending.")
        try:
            booking = api("POST", "/confirm-booking", json=payload)
            st.success(
                f"Booking {booking['id']} created: {money(booking['total_price'])}, "
                f"status {booking['status']}"
            )
        except Exception as exc:  # noqa: BLE001
            st.error(f"Booking failed: {exc}")

elif page == "Dashboard":
    if not user:
        st.info("Log in to see your trips.")
        st.stop()
    st.header("My bookings")
    for booking in api("GET", "/bookings"):
        cols = st.columns([3, 1])
        cols[0].markdown(
            f"**{booking['destination_id']}** {booking['start_date']} → {booking['end_date']} | "
            f"{booking['travelers']} travelers | {money(booking['total_price'])} | "
            f"{booking['status']} / {booking['payment_status']}"
        )
        if booking["status"] in ("pending", "confirmed") and cols[1].button(
            "Cancel", key=f"cancel-{booking['id']}"
        ):
            api("PATCH", f"/bookings/{booking['id']}/status", json={"status": "cancelled"})
            st.rerun()

    st.header("Wishlist")
    for entry in api("GET", "/wishlist"):
        cols = st.columns([3, 1])
        cols[0].write(entry["destination_id"])
        if cols[1].button("Remove", key=f"unwish-{entry['id']}"):
            api("DELETE", f"/wishlist/{entry['destination_id']}")
            st.rerun()

elif page == "Admin":
    try:
        stats = api("GET", "/admin/stats")
    except Exception as exc:  # noqa: BLE001
        st.error(f"Admin access required ({exc})")
        st.stop()
    cols = st.columns(4)
    cols[0].metric("Bookings", stats["bookings"]["total"])
    cols[1].metric("Confirmed", stats["bookings"]["confirmed"])
    cols[2].metric("Pending", stats["bookings"]["pending"])
    cols[3].metric("Users", stats["users"]["total"], f"{stats['users']['active']} active")
    growth = stats["revenue"]["growth"]
    cols = st.columns(2)
    cols[0].metric("Paid revenue", money(stats["revenue"]["total"]))
    cols[1].metric(
        "This month",
        money(stats["revenue"]["this_month"]),
        f"{growth:+.1f}%" if growth is not None else None,
    )
