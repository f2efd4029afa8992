"""
The main entrypoint for the careerguide package.

This module contains the CareerGuide Dash application, which wires a single
``CareerAgent`` conversation to a chat page. The agent itself, with its
classifier, prompt composer, response bank and completion services, lives in
the submodules and can be used without Dash.
"""

import warnings
from typing import Optional

from dash import Dash

from . import documents, layout, llm
from .agent import CareerAgent


class CareerGuide(Dash):
    """
    A Dash chat application around one career agent conversation.

    The constructor uses concrete default implementations for every pillar,
    and each can be replaced by passing a custom implementation.
    """

    def __init__(
        self,
        agent: Optional[CareerAgent] = None,
        layout: Optional["layout.Layout"] = None,
        documents: Optional["documents.DocumentReader"] = None,
        display_name: Optional[str] = None,
        **kwargs,
    ) -> None:
        """
        Initialize the application with configurable pillars.

        Parameters
        ----------
        agent : CareerAgent, optional
            The conversation controller. Defaults to ``CareerAgent()``, which
            reads its completion provider from the environment.
        layout : layout.Layout, optional
            Layout builder for the Dash component tree.
            Defaults to ``layout.Bootstrap()``.
        documents : documents.DocumentReader, optional
            Reader for uploaded resumes. Defaults to ``documents.PDFMiner()``.
        display_name : str, optional
            Name used in the greeting whenever a session starts.
        **kwargs
            Additional arguments passed to the Dash constructor.

        Examples
        --------
        >>> app = CareerGuide(display_name="Sam")

        Offline, with canned replies:

        >>> app = CareerGuide(agent=CareerAgent(llm=llm.Echo()))
        """
        documents_module = globals()["documents"]
        layout_module = globals()["layout"]

        self.layout_builder = layout if layout is not None else layout_module.Bootstrap()
        self.agent = agent if agent is not None else CareerAgent()
        self.documents = (
            documents if documents is not None else documents_module.PDFMiner()
        )
        self.display_name = display_name

        if isinstance(self.agent.llm, llm.OpenAICompatible) and not self.agent.llm.api_key:
            warnings.warn(
                f"No API key configured for provider '{self.agent.llm.provider}'. "
                "Replies will use scripted fallback guidance until one is set.",
                UserWarning,
            )

        if "external_stylesheets" not in kwargs:
            kwargs["external_stylesheets"] = []
        kwargs["external_stylesheets"].extend(
            self.layout_builder.get_external_stylesheets()
        )

        if "external_scripts" not in kwargs:
            kwargs["external_scripts"] = []
        kwargs["external_scripts"].extend(self.layout_builder.get_external_scripts())

        kwargs.setdefault("title", "AURORA Career Guide")
        super().__init__(**kwargs)

        self.agent.start_session(display_name)
        self.layout = self.layout_builder.build_layout()
        self.layout_builder.validate_layout(self.layout)
        self._register_callbacks()

    def _register_callbacks(self) -> None:
        """Registers the callbacks that connect the page to the agent."""
        from .callbacks import register_callbacks

        register_callbacks(self)
