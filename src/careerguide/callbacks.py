"""Dash callbacks that connect the chat page to the career agent."""

import logging

from dash import ALL, Input, Output, State, callback_context, no_update

from .documents import decode_upload
from .errors import DocumentError
from .prompts import resume_review_request

logger = logging.getLogger(__name__)


def register_callbacks(app):
    def render():
        return app.layout_builder.build_messages(app.agent.get_history())

    @app.callback(
        Output("messages_container", "children"),
        Input("url_location", "pathname"),
    )
    def load_conversation(pathname):
        if not app.agent.get_history():
            app.agent.start_session(app.display_name)
        return render()

    @app.callback(
        [
            Output("messages_container", "children", allow_duplicate=True),
            Output("input_textarea", "value"),
        ],
        [Input("submit_button", "n_clicks")],
        [State("input_textarea", "value")],
        running=[
            (Output("status_indicator", "hidden"), False, True),
            (Output("submit_button", "disabled"), True, False),
        ],
        prevent_initial_call=True,
    )
    def send_message(n_clicks, user_input):
        if not n_clicks or not user_input or not user_input.strip():
            return no_update, no_update
        app.agent.process_message(user_input)
        return render(), ""

    @app.callback(
        Output("messages_container", "children", allow_duplicate=True),
        [Input({"type": "quick-action", "message": ALL, "token": ALL}, "n_clicks")],
        running=[(Output("status_indicator", "hidden"), False, True)],
        prevent_initial_call=True,
    )
    def quick_action(n_clicks):
        if not n_clicks or not any(n_clicks):
            return no_update
        token = callback_context.triggered_id["token"]
        app.agent.handle_quick_action(token)
        return render()

    @app.callback(
        [
            Output("messages_container", "children", allow_duplicate=True),
            Output("notice", "is_open", allow_duplicate=True),
        ],
        [Input("reset_button", "n_clicks")],
        prevent_initial_call=True,
    )
    def new_chat(n_clicks):
        if not n_clicks:
            return no_update, no_update
        app.agent.reset()
        app.agent.start_session(app.display_name)
        return render(), False

    @app.callback(
        [
            Output("messages_container", "children", allow_duplicate=True),
            Output("notice", "children"),
            Output("notice", "is_open"),
        ],
        [Input("upload_resume", "contents")],
        [State("upload_resume", "filename")],
        running=[(Output("status_indicator", "hidden"), False, True)],
        prevent_initial_call=True,
    )
    def upload_resume(contents, filename):
        if not contents:
            return no_update, no_update, no_update
        try:
            text = app.documents.extract_text(decode_upload(contents), filename or "")
        except DocumentError as e:
            logger.info("Rejected upload %r: %s", filename, e)
            return no_update, str(e), True

        app.agent.process_message(resume_review_request(filename or "resume.pdf", text))
        return render(), no_update, False

    _register_clientside_callbacks(app)


def _register_clientside_callbacks(app):
    # Keep the newest message in view
    app.clientside_callback(
        """
        function(children) {
            setTimeout(function() {
                const container = document.getElementById('messages_container');
                if (container) {
                    container.scrollTop = container.scrollHeight;
                }
            }, 100);
            return window.dash_clientside.no_update;
        }
        """,
        Output("messages_container", "data-scroll-trigger"),
        Input("messages_container", "children"),
        prevent_initial_call=True,
    )
