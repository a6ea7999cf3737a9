import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder, GridUpdateMode, JsCode


def setup_style():
    st.markdown("""
    <style>
        :root {
            --inv-accent: #2f7cf6;
            --inv-good: #1fa971;
            --inv-bad: #e5484d;
            --inv-card-bg: rgba(47, 124, 246, 0.06);
            --inv-border: rgba(47, 124, 246, 0.22);
        }

        [data-testid="stMetric"] {
            background: var(--inv-card-bg);
            border: 1px solid var(--inv-border);
            border-radius: 14px;
            padding: 14px 18px;
        }

        .inv-low-stock {
            color: var(--inv-bad);
            font-weight: 700;
        }

        .inv-badge {
            display: inline-block;
            padding: 2px 10px;
            border-radius: 999px;
            font-size: 0.8rem;
            background: var(--inv-card-bg);
            border: 1px solid var(--inv-border);
        }

        /* --- SKELETON UI --- */
        @keyframes skeletonPulse {
            0% { opacity: 0.6; }
            50% { opacity: 0.3; }
            100% { opacity: 0.6; }
        }

        .skeleton-box {
            animation: skeletonPulse 1.8s ease-in-out infinite;
            background: rgba(120, 140, 170, 0.15);
            border-radius: 14px;
            padding: 20px;
            min-height: 110px;
        }

        .skeleton-line {
            background: rgba(120, 140, 170, 0.25);
            border-radius: 8px;
            height: 14px;
            margin-bottom: 12px;
        }

        .skeleton-title { width: 50%; height: 12px; margin-bottom: 20px; }
        .skeleton-value { width: 70%; height: 28px; border-radius: 10px; }
    </style>
    """, unsafe_allow_html=True)


def show_loading_placeholder(message="Cargando..."):
    st.markdown(
        '<div class="skeleton-box"><div class="skeleton-title skeleton-line"></div>'
        '<div class="skeleton-value skeleton-line"></div></div>',
        unsafe_allow_html=True,
    )
    st.caption(message)


def render_skeleton_kpis(num_cols=4):
    cols = st.columns(num_cols)
    for col in cols:
        with col:
            st.markdown('''
            <div class="skeleton-box">
                <div class="skeleton-title skeleton-line"></div>
                <div class="skeleton-value skeleton-line"></div>
            </div>
            ''', unsafe_allow_html=True)


def update_chart_layout(fig):
    fig.update_layout(
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(showgrid=False, zeroline=False),
        yaxis=dict(showgrid=True, gridcolor="rgba(120,140,170,0.2)", zeroline=False),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )
    return fig


# es-CO number display inside the grid
NUMBER_FORMATTER = JsCode("""function(params) {
    if (params.value == null || params.value === '') return '';
    const val = Number(params.value);
    if (isNaN(val)) return params.value;
    return val.toLocaleString('es-CO', {maximumFractionDigits: 2});
}""")

CURRENCY_FORMATTER = JsCode("""function(params) {
    if (params.value == null || params.value === '') return '';
    const val = Number(params.value);
    if (isNaN(val)) return params.value;
    return val.toLocaleString('es-CO', {style: 'currency', currency: 'COP'});
}""")


def render_aggrid(df, height=400, pagination=False, currency_columns=(), theme="balham"):
    if df.empty:
        st.info("No hay datos para mostrar")
        return

    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_default_column(filterable=True, sortable=True, resizable=True, wrapText=True, autoHeight=True)

    for col in df.columns:
        is_num = pd.api.types.is_numeric_dtype(df[col]) and not pd.api.types.is_bool_dtype(df[col])
        col_kwargs = {"minWidth": 80 if is_num else 140, "flex": 1 if is_num else 3}
        if col in currency_columns:
            gb.configure_column(col, valueFormatter=CURRENCY_FORMATTER, **col_kwargs)
        elif is_num:
            gb.configure_column(col, valueFormatter=NUMBER_FORMATTER, **col_kwargs)
        else:
            gb.configure_column(col, **col_kwargs)

    if pagination:
        gb.configure_pagination(paginationAutoPageSize=False, paginationPageSize=25)

    valid_themes = ["streamlit", "alpine", "balham", "material"]
    safe_theme = theme if theme in valid_themes else "balham"

    AgGrid(
        df,
        gridOptions=gb.build(),
        height=height,
        theme=safe_theme,
        update_mode=GridUpdateMode.NO_UPDATE,
        allow_unsafe_jscode=True,
    )
