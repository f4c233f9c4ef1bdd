# dashboard.py
import time

import numpy as np
import streamlit as st
import matplotlib.pyplot as plt

import pong_core
from pong_core import Config
from pong_headless import HeadlessPong, render_rgb


def watch(env, frames=600, fps=60):
    """Stream frames of the session into the page at roughly `fps`."""
    placeholder = st.empty()
    for _ in range(frames):
        snap, _ = env.step()
        placeholder.image(render_rgb(snap), channels="RGB",
                          caption=f"frame {snap.frame} • {snap.scores[0]} : {snap.scores[1]}")
        if fps and fps > 0:
            time.sleep(1.0 / fps)


st.set_page_config(layout="wide", page_title="Pong — Headless Dashboard")
st.title("Pong — Headless Session")

# Sidebar controls
st.sidebar.header("Session")
seed = st.sidebar.number_input("Seed", min_value=0, value=7, step=1)
autoplay = st.sidebar.checkbox("Autoplay player paddle", value=True)

st.sidebar.header("Court")
width = st.sidebar.select_slider("Width", options=[400, 600, 800, 1000], value=int(Config.width))
height = st.sidebar.select_slider("Height", options=[300, 400, 500, 600], value=int(Config.height))

cfg = Config(width=width, height=height)
key = (seed, autoplay, width, height)
reset = st.sidebar.button("⟲ Reset")
if reset or st.session_state.get("key") != key:
    st.session_state.env = HeadlessPong(cfg, seed=int(seed), autoplay=autoplay)
    st.session_state.key = key
env = st.session_state.env

c1, c2, c3 = st.sidebar.columns(3)
advance = c1.button("▶ Step")
pause = c2.button("⏸ Pause/Resume")
frames = c3.number_input("Frames", min_value=1, max_value=10_000, value=120, step=60)

if pause:
    pong_core.toggle_pause(env.state)
if advance:
    env.run(int(frames))

left, right = st.columns([1, 1])

with left:
    st.subheader("Court")
    snap = pong_core.snapshot(env.state)
    st.image(render_rgb(snap), channels="RGB",
             caption="paused" if not snap.running else f"frame {snap.frame}")
    demo_fps = st.slider("Watch FPS", 10, 60, 30, 1)
    if st.button("▶ Watch 10 seconds"):
        watch(env, frames=10 * demo_fps, fps=demo_fps)

with right:
    st.subheader("Rally statistics")
    m1, m2, m3 = st.columns(3)
    m1.metric("Score", f"{snap.scores[0]} : {snap.scores[1]}")
    m2.metric("Rallies", f"{len(env.rallies)}")
    m3.metric("Ball speed", f"{env.state.ball.speed:.2f}")

    s1, s2 = st.columns(2)
    with s1:
        st.caption(f"Ball speed, last {env.history} frames")
        fig1, ax1 = plt.subplots()
        ax1.plot(list(env.speeds))
        ax1.set_xlabel("Frame"); ax1.set_ylabel("Speed")
        st.pyplot(fig1, clear_figure=True)
    with s2:
        st.caption("Rally length")
        if env.rallies:
            fig2, ax2 = plt.subplots()
            ax2.hist(env.rallies, bins=min(20, len(env.rallies)))
            ax2.axvline(np.mean(env.rallies), color="k", linestyle="--")
            ax2.set_xlabel("Frames"); ax2.set_ylabel("Rallies")
            st.pyplot(fig2, clear_figure=True)
        else:
            st.info("No rally has finished yet.")

st.caption("Use ▶ Step to advance the session. Changing the seed or court starts a new session.")
