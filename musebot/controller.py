# controller.py
import logging
import sys
from typing import Optional

from musebot.config import Settings, load_settings
from musebot.inference import (
    BackendClient,
    GenerationParameters,
    HuggingFaceClient,
    extract_generated_text,
)
from musebot.models import ChatSession, RequestState, Role

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"
FALLBACK_ERROR_TEXT = "Failed to get response"


def create_capability(settings: Settings):
    """
    Pick the inference capability for these settings.

    The Flask backend is used when MUSE_BACKEND_URL is set, otherwise the
    Hugging Face API is called directly with the token from .env.
    """
    if settings.backend_url:
        return BackendClient.from_settings(settings)
    return HuggingFaceClient.from_settings(settings)


class ExchangeController:
    """
    Runs one prompt/completion round trip against the inference capability
    and records both sides in the session transcript.
    """

    def __init__(self, session: ChatSession, capability, model_id: str,
                 parameters: Optional[GenerationParameters] = None):
        self.session = session
        self.capability = capability
        self.model_id = model_id
        self.parameters = parameters or GenerationParameters()

    @classmethod
    def from_settings(cls, session: ChatSession, settings: Settings) -> "ExchangeController":
        return cls(session, create_capability(settings), settings.model_id)

    def submit(self, prompt_text: str) -> bool:
        """
        Send a prompt and append the user and assistant messages.

        Empty prompts and prompts submitted while a request is pending are
        ignored. Otherwise exactly one assistant message is appended, holding
        either the completion or an "Error: ..." line.

        Returns:
            bool: True if the prompt was accepted.
        """
        if not self.accept(prompt_text):
            return False
        self.settle()
        return True

    def accept(self, prompt_text: str) -> bool:
        """Record the user message and mark the session pending."""
        prompt = (prompt_text or "").strip()
        if not prompt or self.session.is_pending:
            return False

        self.session.append(Role.USER, prompt)
        self.session.state = RequestState.PENDING
        return True

    def settle(self) -> bool:
        """
        Run the pending request and append its outcome.

        The page runs ``accept`` from the input's callback and calls this
        after drawing the input, so the input shows disabled while the
        request is in flight. Does nothing when the session is idle.
        """
        if not self.session.is_pending:
            return False

        prompt = self.session.transcript[-1]
        try:
            payload = self.capability.complete(self.model_id, [prompt.as_dict()], self.parameters)
            text = extract_generated_text(payload)
            if text is None:
                logger.warning("Inference payload had no generated_text")
                text = NO_RESPONSE_TEXT
            self.session.append(Role.ASSISTANT, text)
        except Exception as e:
            logger.error(f"Exchange failed: {e}")
            self.session.append(Role.ASSISTANT, f"Error: {str(e) or FALLBACK_ERROR_TEXT}")
        finally:
            self.session.state = RequestState.IDLE
        return True


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    prompts = sys.argv[1:] if argv is None else argv
    if not prompts:
        prompts = ["Tell me a story"]

    settings = load_settings()
    for prompt in prompts:
        session = ChatSession()
        ExchangeController.from_settings(session, settings).submit(prompt)
        for message in session.messages:
            print(f"{message.role.value}: {message.content}")
        print("-" * 80)


if __name__ == "__main__":
    main()
