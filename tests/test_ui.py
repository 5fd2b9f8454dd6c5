from streamlit.testing.v1 import AppTest


def _busy_button_script():
    import streamlit as st

    from core.ui import busy, flush_toasts, is_busy, mark_busy, notify_success

    st.session_state.setdefault("renders", []).append(is_busy("go"))
    st.button("Go", key="go", disabled=is_busy("go"), on_click=mark_busy, args=("go",))
    if is_busy("go"):
        with busy("go"):
            st.session_state["actions"] = st.session_state.get("actions", 0) + 1
            notify_success("Done")
    flush_toasts()


def _render_only_script():
    import streamlit as st

    from core.ui import is_busy, mark_busy

    st.button("Go", key="go", disabled=is_busy("go"), on_click=mark_busy, args=("go",))


def test_control_disabled_for_the_round_trip():
    at = AppTest.from_function(_busy_button_script)
    at.run()
    assert at.session_state["renders"] == [False]
    assert not at.button(key="go").disabled

    at.button(key="go").click().run()
    assert not at.exception
    # disabled while the action ran, enabled again after the rerun
    assert at.session_state["renders"] == [False, True, False]
    assert at.session_state["actions"] == 1
    assert at.session_state["busy__go"] is False
    assert not at.button(key="go").disabled


def test_toast_survives_rerun():
    at = AppTest.from_function(_busy_button_script)
    at.run()
    at.button(key="go").click().run()
    assert [t.value for t in at.toast] == ["Done"]


def test_flag_set_renders_disabled():
    at = AppTest.from_function(_render_only_script)
    at.session_state["busy__go"] = True
    at.run()
    assert at.button(key="go").disabled

    at.session_state["busy__go"] = False
    at.run()
    assert not at.button(key="go").disabled
