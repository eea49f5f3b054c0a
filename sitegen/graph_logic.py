# sitegen/graph_logic.py
import json
import logging
from typing import Any, Dict, TypedDict

from langchain_core.prompts import PromptTemplate
from langgraph.graph import StateGraph, END

from .errors import BackendError, ExtractionError, ShapeError
from .extraction import extract_json, validate_bundle
from .ollama_client import OllamaClient
from .prompts import BASE_SYSTEM_PROMPT, FOLLOWUP_TEMPLATE, RETRY_TEMPLATE, RETRY_SNIPPET_LENGTH

logger = logging.getLogger(__name__)


# --- Graph State Definition ---
class GenerationState(TypedDict, total=False):
    """Represents the state of one generation run."""
    # Input
    prompt: str

    # Intermediate state
    raw_response: str
    parsed_json: Any

    # Final output
    bundle: Dict[str, str]

    # Utilities
    error_message: str
    error_type: str


# --- Prompt Builders ---

def build_followup_prompt(prompt: str, code: Any) -> str:
    """Embeds the current code bundle and the requested change in one instruction."""
    return PromptTemplate(
        template=FOLLOWUP_TEMPLATE,
        input_variables=["code", "prompt"],
    ).format(
        code=json.dumps(code, separators=(",", ":"), ensure_ascii=False),
        prompt=prompt,
    )


def build_retry_prompt(original_prompt: str, bad_json: str) -> str:
    """Quotes the start of a failed reply and asks for a corrected JSON-only answer."""
    return PromptTemplate(
        template=RETRY_TEMPLATE,
        input_variables=["snippet", "original_prompt"],
    ).format(
        snippet=bad_json[:RETRY_SNIPPET_LENGTH],
        original_prompt=original_prompt,
    )


# --- Pipeline ---

class GenerationPipeline:
    """Backend call, JSON extraction and bundle validation as a langgraph workflow."""

    def __init__(self, ollama_client: OllamaClient, system_prompt: str = BASE_SYSTEM_PROMPT):
        self.ollama_client = ollama_client
        self.system_prompt = system_prompt
        self.graph = self._build_graph()

    # --- Node Functions ---

    def call_backend_node(self, state: GenerationState) -> GenerationState:
        """Calls the inference backend for the raw model output."""
        logger.debug("--- Calling inference backend ---")
        try:
            raw = self.ollama_client.generate(state["prompt"], self.system_prompt)
            return {"raw_response": raw}
        except BackendError as e:
            logger.error("Error calling inference backend: %s", e)
            return {"error_message": str(e), "error_type": type(e).__name__}

    def extract_json_node(self, state: GenerationState) -> GenerationState:
        """Recovers the JSON object embedded in the model output."""
        logger.debug("--- Extracting JSON ---")
        try:
            return {"parsed_json": extract_json(state["raw_response"])}
        except ExtractionError as e:
            return {"error_message": str(e), "error_type": type(e).__name__}

    def validate_bundle_node(self, state: GenerationState) -> GenerationState:
        """Checks the parsed JSON is a complete code bundle."""
        logger.debug("--- Validating bundle ---")
        try:
            bundle = validate_bundle(state["parsed_json"])
        except ShapeError as e:
            logger.error("Invalid bundle: %s", e)
            return {"error_message": str(e), "error_type": type(e).__name__}
        logger.info("Successfully validated response structure")
        return {"bundle": bundle.model_dump()}

    # --- Graph Assembly ---

    @staticmethod
    def should_continue(state: GenerationState):
        """Terminates the graph if an error has occurred."""
        return "END" if state.get("error_message") else "continue"

    def _build_graph(self):
        workflow = StateGraph(GenerationState)

        workflow.add_node("call_backend", self.call_backend_node)
        workflow.add_node("extract_json", self.extract_json_node)
        workflow.add_node("validate_bundle", self.validate_bundle_node)

        workflow.set_entry_point("call_backend")
        workflow.add_conditional_edges("call_backend", self.should_continue, {"continue": "extract_json", "END": END})
        workflow.add_conditional_edges("extract_json", self.should_continue, {"continue": "validate_bundle", "END": END})
        workflow.add_edge("validate_bundle", END)

        return workflow.compile()

    def run(self, prompt: str) -> GenerationState:
        """Runs one generation and returns the final graph state."""
        return self.graph.invoke({"prompt": prompt})
