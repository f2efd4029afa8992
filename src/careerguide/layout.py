"""Layout builders for the career guide chat page."""

from abc import ABC, abstractmethod
from typing import List, Sequence

import dash_bootstrap_components as dbc
from dash import dcc, html
from dash.development.base_component import Component as DashComponent

from .models import Message, QuickAction, Speaker
from .responses import SUGGESTED_PROMPTS

REQUIRED_COMPONENT_IDS = (
    "url_location",
    "messages_container",
    "input_textarea",
    "submit_button",
    "reset_button",
    "upload_resume",
    "notice",
    "status_indicator",
)

SUGGESTION_ICONS = ("bi-file-earmark-text", "bi-chat-dots", "bi-bullseye", "bi-briefcase")
SUGGESTIONS_KEY = "suggested"


class Layout(ABC):
    """Interface for building the Dash component layout."""

    @abstractmethod
    def build_layout(self) -> DashComponent:
        """Constructs and returns the entire Dash component tree for the UI."""
        pass

    @abstractmethod
    def build_messages(self, messages: Sequence[Message]) -> List[DashComponent]:
        """Converts conversation messages into renderable Dash components."""
        pass

    def get_external_stylesheets(self) -> List[str]:
        return []

    def get_external_scripts(self) -> List[str]:
        return []

    def validate_layout(self, component: DashComponent) -> None:
        """Raises ValueError if the tree lacks an ID the callbacks depend on."""
        missing = set(REQUIRED_COMPONENT_IDS) - set(_component_ids(component))
        if missing:
            raise ValueError(
                f"Layout is missing required component IDs: {', '.join(sorted(missing))}"
            )


def _component_ids(component) -> List[str]:
    if isinstance(component, (list, tuple)):
        return [i for child in component for i in _component_ids(child)]
    if not isinstance(component, DashComponent):
        return []
    ids = []
    component_id = getattr(component, "id", None)
    if isinstance(component_id, str):
        ids.append(component_id)
    ids.extend(_component_ids(getattr(component, "children", None)))
    return ids


class Bootstrap(Layout):
    """Single-column chat page styled with Bootstrap."""

    title = "AURORA Career Guide"

    def get_external_stylesheets(self) -> List[str]:
        return [dbc.themes.BOOTSTRAP, dbc.icons.BOOTSTRAP]

    def build_layout(self) -> DashComponent:
        return html.Div(
            className="d-flex flex-column vh-100",
            children=[
                dcc.Location(id="url_location", refresh=False),
                self.build_header(),
                dbc.Alert(
                    id="notice",
                    color="warning",
                    is_open=False,
                    dismissable=True,
                    className="m-2",
                ),
                html.Main(
                    id="messages_container",
                    className="flex-grow-1 p-3",
                    style={"overflowY": "auto"},
                    children=[],
                ),
                self.build_input_area(),
            ],
        )

    def build_header(self) -> DashComponent:
        return html.Header(
            className="p-2 bg-light border-bottom",
            children=dbc.Container(
                fluid=True,
                children=dbc.Row(
                    align="center",
                    children=[
                        dbc.Col(html.H4(self.title, className="m-0")),
                        dbc.Col(
                            dbc.Button(
                                "New Chat",
                                id="reset_button",
                                color="secondary",
                                outline=True,
                                size="sm",
                            ),
                            width="auto",
                        ),
                    ],
                ),
            ),
        )

    def build_input_area(self) -> DashComponent:
        return html.Footer(
            className="p-3 bg-light border-top",
            children=[
                html.Div(
                    "AURORA is thinking...",
                    id="status_indicator",
                    hidden=True,
                    className="text-muted small mb-2",
                ),
                dbc.InputGroup(
                    [
                        dcc.Upload(
                            id="upload_resume",
                            accept=".pdf",
                            children=dbc.Button(
                                html.I(className="bi bi-paperclip"),
                                color="light",
                                title="Attach resume (PDF)",
                            ),
                        ),
                        dbc.Textarea(
                            id="input_textarea",
                            placeholder="Ask about your career...",
                            rows=1,
                        ),
                        dbc.Button("Send", id="submit_button", color="primary"),
                    ]
                ),
            ],
        )

    def build_messages(self, messages: Sequence[Message]) -> List[DashComponent]:
        if not messages:
            return []
        components = [self.build_message(message) for message in messages]
        last = messages[-1]
        if last.speaker == Speaker.AGENT and last.quick_actions:
            components.append(self.build_quick_actions(last))
        if not any(message.speaker == Speaker.USER for message in messages):
            components.append(self.build_suggestions(SUGGESTED_PROMPTS))
        return components

    def build_message(self, message: Message) -> DashComponent:
        style = {
            "padding": "10px",
            "borderRadius": "15px",
            "marginBottom": "10px",
            "maxWidth": "70%",
            "width": "fit-content",
        }
        if message.speaker == Speaker.USER:
            style["marginLeft"] = "auto"
            style["backgroundColor"] = "#dcf8c6"
        else:
            style["marginRight"] = "auto"
            style["backgroundColor"] = "#ffffff"
            style["border"] = "1px solid #eee"

        return html.Div(dcc.Markdown(message.text), style=style)

    def build_quick_actions(self, message: Message) -> DashComponent:
        return html.Div(
            className="d-flex flex-wrap gap-2 mb-3",
            children=[
                dbc.Button(
                    action.label,
                    id={"type": "quick-action", "message": message.id, "token": action.token},
                    n_clicks=0,
                    color="info",
                    outline=True,
                    size="sm",
                )
                for action in message.quick_actions
            ],
        )

    def build_suggestions(self, prompts: Sequence[QuickAction]) -> DashComponent:
        """Starter prompts for an empty conversation, sent as quick actions."""
        return dbc.Row(
            className="g-2 mb-3",
            children=[
                dbc.Col(
                    dbc.Button(
                        [html.I(className=f"bi {icon} me-2"), prompt.label],
                        id={
                            "type": "quick-action",
                            "message": SUGGESTIONS_KEY,
                            "token": prompt.token,
                        },
                        n_clicks=0,
                        color="light",
                        className="w-100 text-start border",
                    ),
                    xs=12,
                    md=6,
                )
                for icon, prompt in zip(SUGGESTION_ICONS, prompts)
            ],
        )
