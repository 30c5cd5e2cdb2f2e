from streamlit.testing.v1 import AppTest


def _delete_button_app():
    import streamlit as st

    from finance_tracker.shared_sidebar import confirm_delete

    if confirm_delete("delete_item", "Delete this item?"):
        st.success("deleted")


def test_delete_needs_confirmation() -> None:
    at = AppTest.from_function(_delete_button_app).run()
    assert len(at.warning) == 0

    at.button(key="delete_item").click().run()
    assert at.warning[0].value == "Delete this item?"
    assert len(at.success) == 0

    at.button(key="delete_item_confirm").click().run()
    assert at.success[0].value == "deleted"

    at.run()
    assert len(at.warning) == 0
    assert len(at.success) == 0


def test_cancel_clears_pending_delete() -> None:
    at = AppTest.from_function(_delete_button_app).run()
    at.button(key="delete_item").click().run()
    at.button(key="delete_item_cancel").click().run()
    assert len(at.warning) == 0
    assert len(at.success) == 0
