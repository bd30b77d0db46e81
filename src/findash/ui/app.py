"""Streamlit dashboard page. Launch with ``findash ui``."""
import asyncio

import streamlit as st

from findash.config import settings
from findash.domain.categories import RowCategory
from findash.sync.engine import DashboardSyncEngine
from findash.sync.view_state import LoadState
from findash.ui.api_client import FinDashClient
from findash.ui.state import get_api_url, get_view_state, init_session, reset_view_state, set_api_url
from findash.ui.streamlit_renderer import DashboardLayout, StreamlitRenderer, TABLE_LABELS


async def _sync(renderer, view, actions) -> None:
    async with FinDashClient(get_api_url(), timeout=settings.REQUEST_TIMEOUT) as client:
        engine = DashboardSyncEngine(client, renderer, view, page_size=settings.PAGE_SIZE)
        await asyncio.gather(*(action(engine) for action in actions))


st.set_page_config(page_title="Finance Dashboard", layout="wide")
st.title("Finance Dashboard")
init_session()

with st.sidebar:
    api_url = st.text_input("API URL", value=get_api_url())
    if api_url.strip() and api_url.strip() != get_api_url():
        set_api_url(api_url.strip())
        reset_view_state()
    if st.button("Reset dashboard"):
        reset_view_state()

view = get_view_state()
layout = DashboardLayout()
renderer = StreamlitRenderer(layout)
renderer.redraw(view)

actions = []

if st.button("Refresh metrics") or view.metrics is None:
    actions.append(lambda engine: engine.load_metrics())

for category in RowCategory:
    slot = view.slot(category)
    label = TABLE_LABELS[category]
    c1, c2, c3 = st.columns([1, 1, 4])
    more = c1.button(f"Load more {label.lower()}", disabled=slot.exhausted, key=f"more-{category.value}")
    refresh = c2.button(f"Refresh {label.lower()}", key=f"refresh-{category.value}")
    c3.caption(f"{slot.rendered} of {slot.total if slot.total is not None else '?'} rows · {slot.state.value}")
    if slot.state is LoadState.FAILED:
        retry = "retry available" if slot.retriable else "not retriable"
        st.error(f"{label} failed to load: {slot.error} ({retry})")

    if refresh:
        actions.append(lambda engine, c=category: engine.refresh(c))
    elif more or slot.state is LoadState.EMPTY:
        actions.append(lambda engine, c=category: engine.load_more(c))

if actions:
    asyncio.run(_sync(renderer, view, actions))
