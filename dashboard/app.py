"""Streamlit dashboard for the meeting room booking API."""

from __future__ import annotations

import datetime
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import requests
import streamlit as st

# ==========================================
# Configuration & Constants
# ==========================================
# Point this to your local FastAPI server
API_BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:8000")

st.set_page_config(
    page_title="Meeting Room Booking",
    page_icon="🏢",
    layout="wide",
)


# ==========================================
# API Helper Functions
# ==========================================
def _unwrap(response: requests.Response) -> Optional[Any]:
    """Return `data` from a success envelope, or show the envelope's error."""
    try:
        body = response.json()
    except ValueError:
        st.error(f"Unexpected response ({response.status_code})")
        return None
    if body.get("success"):
        return body.get("data")
    st.error(body.get("error", "Request failed"))
    for item in body.get("errors", []):
        st.caption(f"• {item['field']}: {item['message']}")
    return None


def fetch_rooms() -> List[Dict[str, Any]]:
    try:
        response = requests.get(f"{API_BASE_URL}/api/rooms", timeout=5)
        return _unwrap(response) or []
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def fetch_bookings(room_id: Optional[str], target_date: Optional[datetime.date]) -> List[Dict[str, Any]]:
    params: Dict[str, str] = {}
    if room_id:
        params["roomId"] = room_id
    if target_date:
        params["date"] = target_date.isoformat()
    try:
        response = requests.get(f"{API_BASE_URL}/api/bookings", params=params, timeout=5)
        return _unwrap(response) or []
    except requests.exceptions.RequestException as e:
        st.error(f"Backend connection failed: {e}")
        return []


def submit_booking(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    try:
        response = requests.post(f"{API_BASE_URL}/api/bookings", json=payload, timeout=5)
        return _unwrap(response)
    except requests.exceptions.RequestException as e:
        st.error(f"Booking failed: {e}")
        return None


def remove_booking(booking_id: str) -> bool:
    try:
        response = requests.delete(f"{API_BASE_URL}/api/bookings/{booking_id}", timeout=5)
        return _unwrap(response) is not None
    except requests.exceptions.RequestException as e:
        st.error(f"Delete failed: {e}")
        return False


def fetch_available_slots(room_id: str, target_date: datetime.date) -> List[str]:
    try:
        response = requests.get(
            f"{API_BASE_URL}/api/bookings/available-slots",
            params={"roomId": room_id, "date": target_date.isoformat()},
            timeout=5,
        )
        return _unwrap(response) or []
    except requests.exceptions.RequestException as e:
        st.error(f"Availability lookup failed: {e}")
        return []


def _room_options(rooms: List[Dict[str, Any]]) -> Dict[str, str]:
    return {f"{room['name']} (cap. {room['capacity']})": room["id"] for room in rooms}


# ==========================================
# UI Page Functions
# ==========================================
def render_rooms_page() -> None:
    st.header("🏢 Rooms")
    rooms = fetch_rooms()
    if rooms:
        st.dataframe(pd.DataFrame(rooms), use_container_width=True)
    else:
        st.info("No rooms available.")


def render_bookings_page() -> None:
    st.header("📅 Bookings")
    rooms = fetch_rooms()
    options = {"All rooms": ""}
    options.update(_room_options(rooms))

    col1, col2 = st.columns(2)
    with col1:
        room_label = st.selectbox("Room", list(options))
    with col2:
        filter_by_date = st.checkbox("Filter by date")
        target_date = st.date_input("Date", datetime.date.today()) if filter_by_date else None

    bookings = fetch_bookings(options[room_label] or None, target_date)
    if not bookings:
        st.info("No bookings found.")
        return

    df = pd.json_normalize(bookings)
    st.dataframe(
        df[["id", "roomName", "user.name", "user.email", "startTime", "endTime"]],
        use_container_width=True,
    )

    booking_id = st.selectbox("Booking to delete", [b["id"] for b in bookings])
    if st.button("Delete Booking"):
        if remove_booking(booking_id):
            st.success("Booking deleted.")


def render_new_booking_page() -> None:
    st.header("📝 New Booking")
    rooms = fetch_rooms()
    if not rooms:
        st.info("No rooms available.")
        return
    options = _room_options(rooms)

    with st.form("booking_form"):
        room_label = st.selectbox("Room", list(options))
        name = st.text_input("Your name")
        email = st.text_input("Email")
        col1, col2, col3 = st.columns(3)
        with col1:
            booking_date = st.date_input("Date", datetime.date.today() + datetime.timedelta(days=1))
        with col2:
            start = st.time_input("Start", datetime.time(9, 0), step=1800)
        with col3:
            end = st.time_input("End", datetime.time(10, 0), step=1800)
        submitted = st.form_submit_button("Book Room", type="primary")

    if submitted:
        tz = datetime.timezone.utc
        payload = {
            "roomId": options[room_label],
            "user": {"name": name, "email": email},
            "startTime": datetime.datetime.combine(booking_date, start, tzinfo=tz).isoformat(),
            "endTime": datetime.datetime.combine(booking_date, end, tzinfo=tz).isoformat(),
        }
        booking = submit_booking(payload)
        if booking:
            st.success(f"Booked {booking['roomName']} ({booking['id']}).")

    st.write("### Available Slots")
    slot_room = st.selectbox("Room to check", list(options), key="slot_room")
    slot_date = st.date_input("Day to check", datetime.date.today(), key="slot_date")
    if st.button("Show Free Slots"):
        slots = fetch_available_slots(options[slot_room], slot_date)
        if slots:
            st.write(", ".join(datetime.datetime.fromisoformat(s).strftime("%H:%M") for s in slots))
        else:
            st.warning("No free slots on that day.")


# ==========================================
# Main App Router
# ==========================================
def main() -> None:
    st.sidebar.title("Meeting Room Booking")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        ["Rooms", "Bookings", "New Booking"],
    )

    st.sidebar.markdown("---")
    st.sidebar.caption(f"API: {API_BASE_URL}")
    st.sidebar.caption("Times are UTC")

    if page == "Rooms":
        render_rooms_page()
    elif page == "Bookings":
        render_bookings_page()
    elif page == "New Booking":
        render_new_booking_page()


if __name__ == "__main__":
    main()
