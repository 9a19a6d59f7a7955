# app.py

import logging
import os

# Streamlit is optional; without it we fall back to a terminal loop
try:
    import streamlit as st
    STREAMLIT_AVAILABLE = True
except ImportError:
    STREAMLIT_AVAILABLE = False

from core.errors import SolveError
from core.session import ADVANCED_EXAMPLES, EXAMPLES, TutorSession
from core.settings import MODEL_CHOICES, DEFAULT_MODEL, LLMConfig, SettingsStore, load_config, readable_model
from core.solver import plugins
from utils.llm_service import LLMError, LLMNotConfiguredError, build_service

logging.basicConfig(
    level=os.environ.get("CALC_TUTOR_LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("calc_tutor.app")

STORE = SettingsStore()
TOPIC_AUTO = "Auto-detect"


# ---------------------------
# Session helpers
# ---------------------------
def _tutor() -> TutorSession:
    if "tutor" not in st.session_state:
        st.session_state["tutor"] = TutorSession(llm_service=build_service(load_config(STORE)))
    return st.session_state["tutor"]


def _flash(kind: str, message: str):
    st.session_state["flash"] = (kind, message)


def _set_expression(text: str):
    st.session_state["expression_input"] = text


def _on_practice():
    tutor = _tutor()
    try:
        problem = tutor.generate_practice_problem()
    except LLMNotConfiguredError as e:
        _flash("error", str(e))
        return
    except LLMError as e:
        logger.warning("practice problem failed: %s", e)
        _flash("error", "Failed to generate problem")
        return
    _set_expression(problem.problem)
    _flash("success", "Practice problem generated!")


def _solve(tutor: TutorSession, text: str, topic: str):
    preferred = None if topic == TOPIC_AUTO else topic
    try:
        with st.spinner("Solving..."):
            tutor.submit(text, preferred_topic=preferred)
    except LLMError as e:
        logger.warning("natural-language conversion failed: %s", e)
        st.error("Failed to convert natural language input")
        return
    except (ValueError, SolveError) as e:
        logger.info("solve failed: %s", e)
        st.error(str(e))
        return
    if tutor.last_conversion:
        st.info(f"Converted to: {tutor.last_conversion}")
    st.toast("Solution found!")


# ---------------------------
# UI sections
# ---------------------------
def render_solution(tutor: TutorSession, show_methods: bool):
    solution = tutor.solution
    if solution is None:
        st.info("Ready to solve. Enter an expression above to see a step-by-step solution.")
        return
    st.subheader("💡 Solution")
    badges = f"`{solution.type}`"
    if solution.method:
        badges += f"  `{solution.method}`"
    st.markdown(badges)
    st.caption("Original expression")
    st.code(solution.original, language=None)
    st.caption("Result")
    st.success(solution.result)
    st.markdown("#### Step-by-step solution")
    for step in solution.steps:
        st.markdown(f"**Step {step.step}:** `{step.expression}`")
        line = step.explanation
        if show_methods and step.method:
            line += f" _({step.method})_"
        st.caption(line)


def render_history(tutor: TutorSession):
    st.markdown("### 🕘 Recent solutions")
    if not len(tutor.history):
        st.write("No solutions yet.")
        return
    for i, item in enumerate(tutor.history):
        with st.expander(f"{item.type} — {item.original[:40]}"):
            st.write(f"= {item.result}")
            st.button("Load", key=f"history_{i}", on_click=_set_expression, args=(item.original,))


def render_chat(tutor: TutorSession):
    if not tutor.connected:
        st.info("Connect an AI assistant in the AI Settings tab to chat, get enhanced explanations and tutoring.")
        return
    c1, c2, c3, c4 = st.columns(4)
    try:
        if c1.button("Explain current solution"):
            with st.spinner("Thinking..."):
                tutor.enhance_explanation()
            st.toast("Enhanced explanation generated!")
        if c2.button("Tutor me on this problem"):
            with st.spinner("Thinking..."):
                tutor.start_tutoring()
            st.toast("Tutoring session started!")
        if c4.button("Analyze problem"):
            if not tutor.expression:
                raise ValueError("No current problem to analyze")
            with st.spinner("Analyzing..."):
                analysis = tutor.llm_service.analyze_problem(tutor.expression)
            with st.expander(f"Analysis — {analysis.type} ({analysis.difficulty})", expanded=True):
                st.write(f"**Approach:** {analysis.approach}")
                st.write("**Concepts:** " + ", ".join(analysis.concepts))
                for s in analysis.steps:
                    st.markdown(f"{s.step}. **{s.action}** — {s.reasoning} → `{s.result}`")
                st.success(analysis.solution)
    except ValueError as e:
        st.error(str(e))
    except LLMError as e:
        logger.warning("chat action failed: %s", e)
        st.error("Failed to get AI response")
    if c3.button("Clear chat"):
        tutor.clear_chat()

    for msg in tutor.chat:
        with st.chat_message(msg.role):
            if msg.kind != "chat":
                st.caption(msg.kind.capitalize())
            st.markdown(msg.content)

    message = st.chat_input("Ask about the current problem...")
    if message:
        try:
            with st.spinner("Thinking..."):
                tutor.ask(message)
        except LLMError as e:
            logger.warning("chat failed: %s", e)
            st.error(str(e))
        else:
            st.rerun()


def render_settings(tutor: TutorSession):
    st.markdown("### 🧠 AI Assistant")
    if tutor.connected:
        st.success(f"AI Assistant connected — model: {readable_model(tutor.llm_service.config.model)}")
        st.caption('Try natural language like "find the derivative of x squared".')
        if st.button("Disconnect"):
            try:
                STORE.clear()
            except OSError as e:
                logger.warning("could not remove settings: %s", e)
            tutor.disconnect()
            st.toast("LLM disconnected")
            st.rerun()
        return

    st.write("Connect an AI assistant for natural language input, enhanced explanations, "
             "tutoring and practice problems.")
    models = list(MODEL_CHOICES)
    model = st.selectbox("AI Model", models, index=models.index(DEFAULT_MODEL), format_func=readable_model)
    api_key = st.text_input("API key (Hugging Face hf_... or OpenRouter)", type="password")
    base_url = st.text_input("Base URL (optional, OpenAI-compatible)", value="")
    if st.button("Connect AI Assistant"):
        if not api_key.strip():
            st.error("Please enter your API key")
            return
        config = LLMConfig(api_key=api_key.strip(), model=model, base_url=base_url.strip() or None)
        try:
            STORE.save(config)
        except OSError as e:
            logger.warning("could not persist settings: %s", e)
            st.warning("Connected, but the settings could not be saved.")
        tutor.connect(config)
        st.toast("LLM configuration saved!")
        st.rerun()


# ---------------------------
# UI: Streamlit
# ---------------------------
def run_streamlit():
    st.set_page_config(page_title="Calculus Tutor", layout="wide")
    st.title("🧮 Advanced Math Solver")
    st.caption("Derivatives, integrals, limits and implicit differentiation with step-by-step solutions")

    tutor = _tutor()

    with st.sidebar:
        st.header("Settings")
        topic = st.selectbox("Topic", [TOPIC_AUTO] + sorted(p.name for p in plugins()))
        show_methods = st.checkbox("Show rule names on steps", value=True)
        if st.button("Clear history"):
            tutor.history.clear()

    flash = st.session_state.pop("flash", None)
    if flash:
        kind, message = flash
        (st.success if kind == "success" else st.error)(message)

    placeholder = ("Enter math or natural language (e.g. 'find the derivative of x cubed')"
                   if tutor.connected else "e.g. d/dx(x^3), integral(x^2), x^2 + y^2 = 25")
    input_col, solve_col, dice_col = st.columns([6, 1, 1])
    text = input_col.text_input("Expression", key="expression_input", placeholder=placeholder,
                                label_visibility="collapsed")
    solve_clicked = solve_col.button("Solve", type="primary", use_container_width=True)
    if tutor.connected:
        dice_col.button("🎲", help="Generate a practice problem", on_click=_on_practice, use_container_width=True)

    st.caption("Calculus examples")
    cols = st.columns(len(EXAMPLES))
    for col, ex in zip(cols, EXAMPLES):
        col.button(ex, key=f"ex_{ex}", on_click=_set_expression, args=(ex,))
    st.caption("Advanced examples")
    cols = st.columns(len(ADVANCED_EXAMPLES))
    for col, ex in zip(cols, ADVANCED_EXAMPLES):
        col.button(ex, key=f"adv_{ex}", on_click=_set_expression, args=(ex,))

    if solve_clicked:
        _solve(tutor, text, topic)

    solver_tab, chat_tab, settings_tab = st.tabs(["Solver", "AI Chat", "AI Settings"])
    with solver_tab:
        left_col, right_col = st.columns([2, 1])
        with left_col:
            render_solution(tutor, show_methods)
        with right_col:
            render_history(tutor)
    with chat_tab:
        render_chat(tutor)
    with settings_tab:
        render_settings(tutor)


# ---------------------------
# CLI fallback
# ---------------------------
def run_cli():
    tutor = TutorSession(llm_service=build_service(load_config(STORE)))
    print("Calculus Tutor — CLI mode")
    print(f"AI assistant: {'connected' if tutor.connected else 'not connected'}")
    print("Examples: " + "   ".join(EXAMPLES[:3]))
    print("Type 'exit' or Ctrl+C to quit.")
    while True:
        try:
            q = input("\nExpression: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            return
        if not q:
            continue
        if q.lower() in ("exit", "quit"):
            print("Goodbye!")
            return
        try:
            solution = tutor.submit(q)
        except (ValueError, SolveError, LLMError) as e:
            print("Error:", e)
            continue
        if tutor.last_conversion:
            print("Converted to:", tutor.last_conversion)
        print(f"[{solution.type}] {solution.result}")
        print("Steps:")
        for s in solution.steps:
            print(f"  {s.step}. {s.expression} — {s.explanation}")


# ---------------------------
# Entry point
# ---------------------------
if __name__ == "__main__":
    if STREAMLIT_AVAILABLE:
        run_streamlit()
    else:
        print("Streamlit not installed — running CLI fallback. To use web UI: pip install streamlit")
        run_cli()
