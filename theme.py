# theme.py
from html import escape
from constants import (
   APP_TITLE, PRIMARY, PRIMARY_HOVER, ACCENT, DANGER, SUCCESS, TEXT, TEXT_MUTED, BORDER, SURFACE, SURFACE_ALT, RING
)
# MUI-style chip colors keyed by template status_color
CHIP_COLORS = {
   "warning": ACCENT,
   "info": PRIMARY,
   "success": SUCCESS,
   "error": DANGER,
}
def theme_css() -> str:
   """Brand theme as CSS variables (light only)."""
   vars_block = f"""
     --text:{TEXT}; --text-muted:{TEXT_MUTED}; --border:{BORDER};
     --surface:{SURFACE}; --surface-alt:{SURFACE_ALT};
     --primary:{PRIMARY}; --primary-hover:{PRIMARY_HOVER};
     --accent:{ACCENT}; --danger:{DANGER}; --success:{SUCCESS}; --ring:{RING};
     --heading:#0B333C; --field-label:#1B1B1B;
   """
   return f"""
<style>
 :root {{ {vars_block} }}
 /* Layout */
 main .block-container {{ padding-top: 2.2rem !important; padding-bottom: 1.5rem; }}
 html, body, [class^="stApp"] {{
   color: var(--text); background: var(--surface-alt);
   font-family: "Inter", -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
 }}
 header[data-testid="stHeader"] {{ background: transparent !important; border: none !important; box-shadow: none !important; }}
 /* Page header (HTML from page_header) */
 .app-header {{
   background: linear-gradient(145deg, var(--primary) 0%, var(--primary-hover) 100%);
   border-radius: 14px;
   padding: 1.4rem 1.8rem;
   margin-bottom: 1.25rem;
   box-shadow: 0 8px 24px rgba(2, 6, 23, 0.16);
 }}
 .app-title {{ font-weight: 800; font-size: 1.45rem; margin-bottom: 0.2rem; letter-spacing: .3px; color: #fff; }}
 .app-subtitle {{ font-weight: 500; color: rgba(255,255,255,.9); font-size: .95rem; }}
 h1, h2, h3, h4, h5, h6 {{ color: var(--heading); }}
 /* Buttons */
 .stButton>button {{
   background: var(--primary) !important; color: #fff !important; border: none !important;
   border-radius: 10px !important; padding: .55rem 1rem !important; font-weight: 600;
   transition: all .15s ease;
 }}
 .stButton>button:hover {{ background: var(--primary-hover) !important; transform: translateY(-1px); }}
 .stButton>button:disabled {{ opacity: .45; transform: none; }}
 .stDownloadButton>button {{
   background: var(--accent) !important; color: #1B1B1B !important; border: none !important;
   border-radius: 10px !important; padding: .55rem 1rem !important; font-weight: 700;
 }}
 [data-testid="stWidgetLabel"], [data-testid="stWidgetLabel"] * {{ color: var(--field-label) !important; }}
 .stTextInput > div > div > input, .stSelectbox > div > div {{
   background: var(--surface); border: 1px solid var(--border); border-radius: 10px; color: var(--text);
 }}
 .stTextInput > div > div > input:focus, .stSelectbox > div > div:focus-within {{
   outline: none; box-shadow: 0 0 0 3px var(--ring); border-color: transparent;
 }}
 [data-testid="stFileUploader"] > div {{
   background: var(--surface) !important; border: 1px dashed var(--primary) !important; border-radius: 12px !important;
 }}
 /* Status chip */
 .status-chip {{
   display: inline-block; padding: .15rem .7rem; border-radius: 999px;
   font-size: .78rem; font-weight: 700; color: #fff; margin-bottom: .5rem;
 }}
 /* Stepper */
 .stepper {{ display: flex; gap: .5rem; margin: .5rem 0 1.25rem; }}
 .stepper .step {{
   flex: 1; text-align: center; padding: .45rem .25rem; border-radius: 8px;
   background: var(--surface); border: 1px solid var(--border); color: var(--text-muted); font-size: .85rem;
 }}
 .stepper .step.done {{ border-color: var(--success); color: var(--success); }}
 .stepper .step.active {{ background: var(--primary); border-color: var(--primary); color: #fff; font-weight: 700; }}
 /* Cards */
 [data-testid="stMetric"] {{
   background: var(--surface); border: 1px solid var(--border); border-radius: 12px; padding: .8rem 1rem;
 }}
 .hub-card {{
   background: var(--surface); border: 1px solid var(--border); border-left: 6px solid var(--primary);
   border-radius: 12px; padding: 1rem 1.2rem; margin-bottom: .75rem;
 }}
 .hub-card .hub-name {{ font-weight: 700; font-size: 1.05rem; color: var(--heading); }}
 .hub-card .hub-desc {{ color: var(--text-muted); font-size: .9rem; }}
 .stAlert > div {{ border-radius: 10px; border: 1px solid var(--border); }}
</style>
"""
def page_header(title: str = APP_TITLE, subtitle: str = "") -> str:
   """Header banner HTML for st.markdown(..., unsafe_allow_html=True)."""
   sub = f'<div class="app-subtitle">{escape(subtitle)}</div>' if subtitle else ""
   return f'<div class="app-header"><div class="app-title">{escape(title)}</div>{sub}</div>'
def status_chip(label: str, color: str = "warning") -> str:
   bg = CHIP_COLORS.get(color, ACCENT)
   return f'<span class="status-chip" style="background:{bg}">{escape(label)}</span>'
def stepper_html(steps: list[str], active: int) -> str:
   """Horizontal stepper; steps before ``active`` are marked done."""
   parts = []
   for i, label in enumerate(steps):
       cls = "active" if i == active else ("done" if i < active else "")
       parts.append(f'<div class="step {cls}">{i + 1}. {escape(label)}</div>')
   return f'<div class="stepper">{"".join(parts)}</div>'
