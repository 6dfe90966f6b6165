import os
import math
import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import requests

# Page configuration
st.set_page_config(
    page_title="PCA Finance Explorer",
    page_icon="📉",
    layout="wide",
    initial_sidebar_state="expanded",
)

# API configuration
API_URL = os.getenv("PCA_API_URL", "http://localhost:8000/api")

st.markdown(
    """
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        color: #7c3aed;
        text-align: center;
        margin-bottom: 2rem;
    }
</style>
""",
    unsafe_allow_html=True,
)

# Header
st.markdown(
    '<div class="main-header">📉 PCA on a Finance Dataset</div>',
    unsafe_allow_html=True,
)

# Sidebar for navigation
st.sidebar.title("🚀 Navigation")
dashboard_section = st.sidebar.radio(
    "Choose a section:",
    [
        "📋 Dataset",
        "✨ After PCA",
        "🗜️ Compress",
        "🎯 Projection Demo",
    ],
)
seed = st.sidebar.number_input("Dataset seed", 0, 10_000, 42, step=1)


# Cache data fetching functions
@st.cache_data(ttl=300)
def fetch_dataset(seed):
    try:
        response = requests.get(f"{API_URL}/dataset", params={"seed": seed}, timeout=10)
        if response.status_code == 200:
            return response.json()
    except requests.RequestException as e:
        print(f"Error fetching dataset: {e}")
    return {"rows": [], "metric_keys": [], "feature_names": [], "metric_labels": {}}


@st.cache_data(ttl=300)
def fetch_pca(seed, metrics, n_components=2):
    payload = {"metrics": list(metrics), "n_components": n_components, "seed": seed}
    try:
        response = requests.post(f"{API_URL}/pca", json=payload, timeout=10)
        if response.status_code == 200:
            return response.json()
        print(f"PCA request failed: {response.status_code} {response.text}")
    except requests.RequestException as e:
        print(f"Error fetching PCA: {e}")
    # neutral result so the page still renders
    return {
        "available": False,
        "transformed": [],
        "components": [],
        "explained_variance_pct": [0.0] * n_components,
        "total_explained_pct": 0.0,
        "companies": [],
        "metrics": list(metrics),
    }


def fetch_projection(seed, metrics, angle):
    payload = {"metrics": list(metrics), "angle": angle, "seed": seed}
    try:
        response = requests.post(f"{API_URL}/projection", json=payload, timeout=10)
        if response.status_code == 200:
            return response.json()
        print(f"Projection request failed: {response.status_code} {response.text}")
    except requests.RequestException as e:
        print(f"Error fetching projection: {e}")
    return None


dataset = fetch_dataset(seed)
metric_keys = dataset.get("metric_keys", [])
metric_labels = dataset.get("metric_labels", {})
feature_names = dataset.get("feature_names", [])

if not dataset.get("rows"):
    st.error("❌ Could not reach the API. Start it with `python backend/main.py`.")


# =========================
# Dataset
# =========================
if dashboard_section == "📋 Dataset":
    st.header("📋 25 Companies, 8 Metrics")
    df = pd.DataFrame(dataset.get("rows", []))
    if not df.empty:
        df = df.rename(columns=dict(zip(metric_keys, feature_names)))
        st.dataframe(df, width="stretch", hide_index=True)

        st.subheader("🔗 Correlation between metrics")
        corr = df[feature_names].corr()
        fig_corr = px.imshow(
            corr,
            text_auto=".2f",
            color_continuous_scale="RdBu_r",
            zmin=-1,
            zmax=1,
            height=500,
        )
        st.plotly_chart(fig_corr, width="stretch")
        st.caption("Every metric is driven by one hidden value, so the columns move together.")

# =========================
# After PCA
# =========================
elif dashboard_section == "✨ After PCA":
    st.header("✨ 8 Metrics → 2 Principal Components")
    result = fetch_pca(seed, tuple(metric_keys), 2)

    pct = result.get("explained_variance_pct", [0.0, 0.0])
    col1, col2, col3 = st.columns(3)
    col1.metric("PC1", f"{pct[0]:.1f}%")
    col2.metric("PC2", f"{pct[1]:.1f}%")
    col3.metric("Total kept", f"{result.get('total_explained_pct', 0.0):.1f}%")

    if result.get("available") and result.get("transformed"):
        points = pd.DataFrame(result["transformed"], columns=["PC1", "PC2"])
        points["company"] = result.get("companies", [])
        fig_scatter = px.scatter(
            points,
            x="PC1",
            y="PC2",
            text="company",
            title="🏢 Companies in PC space",
            height=550,
        )
        fig_scatter.update_traces(textposition="top center", marker=dict(size=10, color="#8b5cf6"))
        st.plotly_chart(fig_scatter, width="stretch")

        loadings = pd.DataFrame(
            result["components"],
            index=["PC1", "PC2"],
            columns=[metric_labels.get(k, k) for k in result.get("metrics", [])],
        ).T
        fig_loadings = px.bar(
            loadings,
            barmode="group",
            title="🧭 Component directions (loadings)",
            height=400,
        )
        st.plotly_chart(fig_loadings, width="stretch")
        st.caption("The sign of a component is arbitrary: flipping all of its loadings describes the same axis.")
    else:
        st.warning("⚠️ PCA unavailable for this input.")

# =========================
# Compress
# =========================
elif dashboard_section == "🗜️ Compress":
    st.header("🗜️ 100 → 2 Pages")
    selected = st.multiselect(
        "Pick the metrics to compress",
        metric_keys,
        default=metric_keys,
        format_func=lambda k: metric_labels.get(k, k),
    )
    st.caption("Select 2+ metrics. They are compressed into 2 principal pages (PC1 & PC2).")

    result = fetch_pca(seed, tuple(selected), 2) if selected else None
    pct = result.get("explained_variance_pct", [0.0, 0.0]) if result else [0.0, 0.0]

    fig_bar = go.Figure(
        go.Bar(
            x=pct,
            y=["Page 1 (PC1)", "Page 2 (PC2)"],
            orientation="h",
            marker_color=["#8b5cf6", "#22d3ee"],
            text=[f"{p:.1f}%" for p in pct],
        )
    )
    fig_bar.update_layout(xaxis_range=[0, 100], height=300, title="Explained by two pages")
    st.plotly_chart(fig_bar, width="stretch")
    st.metric("Total story kept", f"{sum(pct):.1f}%")
    if result is not None and not result.get("available", True):
        st.info("ℹ️ Not enough metrics for two components, showing 0%.")

# =========================
# Projection Demo
# =========================
elif dashboard_section == "🎯 Projection Demo":
    st.header("🎯 Find the Best Axis")
    col1, col2 = st.columns(2)
    default_x = metric_keys.index("pe") if "pe" in metric_keys else 0
    default_y = metric_keys.index("roe") if "roe" in metric_keys else 0
    with col1:
        x_key = st.selectbox("X metric", metric_keys, index=default_x,
                             format_func=lambda k: metric_labels.get(k, k))
    with col2:
        y_key = st.selectbox("Y metric", metric_keys, index=default_y,
                             format_func=lambda k: metric_labels.get(k, k))

    angle_deg = st.slider("Projection angle (°)", 0, 179, 0)

    if x_key == y_key:
        st.warning("⚠️ Pick two different metrics.")
    else:
        proj = fetch_projection(seed, [x_key, y_key], math.radians(angle_deg))
        if proj is None:
            st.warning("⚠️ Projection unavailable for this input.")
        else:
            best_deg = math.degrees(proj["optimal_angle"])
            c1, c2, c3 = st.columns(3)
            c1.metric("Variance at your angle", f"{proj['variance']:.3f}")
            c2.metric("Best possible variance", f"{proj['optimal_variance']:.3f}")
            c3.metric("PC1 angle", f"{best_deg:.1f}°")

            Z = pd.DataFrame(proj["standardized"], columns=["x", "y"])
            reach = max(1.0, float(Z.abs().to_numpy().max()))
            fig_2d = px.scatter(Z, x="x", y="y", title="Standardized points", height=450)
            for deg, color, name in [(angle_deg, "#f59e0b", "your axis"), (best_deg, "#8b5cf6", "PC1")]:
                a = math.radians(deg)
                fig_2d.add_trace(go.Scatter(
                    x=[-reach * math.cos(a), reach * math.cos(a)],
                    y=[-reach * math.sin(a), reach * math.sin(a)],
                    mode="lines",
                    line=dict(color=color, width=3),
                    name=name,
                ))
            fig_2d.update_yaxes(scaleanchor="x", scaleratio=1)
            st.plotly_chart(fig_2d, width="stretch")

            fig_1d = px.strip(x=proj["projected"], title="1-D projection", height=250)
            st.plotly_chart(fig_1d, width="stretch")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #666; padding: 2rem;'>
        <p>📉 PCA Finance Explorer | Powered by FastAPI + Streamlit</p>
    </div>
    """,
    unsafe_allow_html=True,
)
