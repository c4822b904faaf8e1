"""
Session State Module

This module holds the state of one remix session as an explicit state
container. State only changes through ``reduce(state, message)``; the
RemixSession controller performs the network calls and dispatches the
resulting messages.

Transitions:
- Generation: Idle -> Generating -> Generated | GenerationFailed
- Saved list: NotLoaded -> Loading -> Loaded | LoadFailed

Save and delete are not serialized against each other or against list
refreshes, so a delete that races a refresh can bring an item back until
the next refresh.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Union

from data.models import SavedPost
from services.ai_service import AIService
from services.persistence_service import PersistenceGateway
from services.protocols import CompletionService
from services.prompt_builder import build_prompt
from services.response_parser import Post, Unparseable, parse_response
from utils.exceptions import (
    RemixerError, AIServiceError, DatabaseError, QueryError,
    UnparseableResponseError, ValidationError
)
from utils.logger import get_logger

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = RemixerError.user_message


class GenerationStatus(Enum):
    IDLE = "Idle"
    GENERATING = "Generating"
    GENERATED = "Generated"
    FAILED = "GenerationFailed"


class SavedListStatus(Enum):
    NOT_LOADED = "NotLoaded"
    LOADING = "Loading"
    LOADED = "Loaded"
    LOAD_FAILED = "LoadFailed"


@dataclass(frozen=True)
class SessionState:
    """Everything the UI renders for one session."""
    input_text: str = ""
    posts: List[Post] = field(default_factory=list)
    generation: GenerationStatus = GenerationStatus.IDLE
    error: Optional[str] = None            # shown in place of generated posts
    saved_posts: List[SavedPost] = field(default_factory=list)
    saved_status: SavedListStatus = SavedListStatus.NOT_LOADED
    alert: Optional[str] = None            # save/delete/list failures
    sidebar_visible: bool = False

    @property
    def is_loading(self) -> bool:
        return self.generation is GenerationStatus.GENERATING


# =============================================================================
# Messages
# =============================================================================

@dataclass(frozen=True)
class InputChanged:
    text: str


@dataclass(frozen=True)
class GenerationRequested:
    pass


@dataclass(frozen=True)
class GenerationSucceeded:
    posts: List[Post]


@dataclass(frozen=True)
class GenerationFailed:
    message: str


@dataclass(frozen=True)
class SavedListRequested:
    pass


@dataclass(frozen=True)
class SavedListLoaded:
    saved_posts: List[SavedPost]


@dataclass(frozen=True)
class SavedListFailed:
    message: str


@dataclass(frozen=True)
class PostSaved:
    saved_post: SavedPost


@dataclass(frozen=True)
class PostDeleted:
    saved_post_id: int


@dataclass(frozen=True)
class AlertRaised:
    message: str


@dataclass(frozen=True)
class AlertDismissed:
    pass


@dataclass(frozen=True)
class SidebarToggled:
    visible: Optional[bool] = None


Message = Union[
    InputChanged, GenerationRequested, GenerationSucceeded, GenerationFailed,
    SavedListRequested, SavedListLoaded, SavedListFailed, PostSaved, PostDeleted,
    AlertRaised, AlertDismissed, SidebarToggled,
]


def reduce(state: SessionState, message: Message) -> SessionState:
    """
    Apply one message to the session state.

    Args:
        state: The current state.
        message: The message to apply.

    Returns:
        SessionState: The new state. The input state is never modified.
    """
    if isinstance(message, InputChanged):
        return replace(state, input_text=message.text)

    if isinstance(message, GenerationRequested):
        if state.is_loading:
            return state
        return replace(state, generation=GenerationStatus.GENERATING,
                       posts=[], error=None)

    if isinstance(message, GenerationSucceeded):
        return replace(state, generation=GenerationStatus.GENERATED,
                       posts=list(message.posts), error=None)

    if isinstance(message, GenerationFailed):
        return replace(state, generation=GenerationStatus.FAILED,
                       posts=[], error=message.message)

    if isinstance(message, SavedListRequested):
        return replace(state, saved_status=SavedListStatus.LOADING)

    if isinstance(message, SavedListLoaded):
        return replace(state, saved_status=SavedListStatus.LOADED,
                       saved_posts=list(message.saved_posts))

    if isinstance(message, SavedListFailed):
        # Keep the last known-good list.
        return replace(state, saved_status=SavedListStatus.LOAD_FAILED, alert=message.message)

    if isinstance(message, PostSaved):
        # Newest first, matching the store's list order.
        return replace(state, saved_posts=[message.saved_post] + state.saved_posts,
                       sidebar_visible=True)

    if isinstance(message, PostDeleted):
        return replace(state, saved_posts=[p for p in state.saved_posts
                                           if p.id != message.saved_post_id])

    if isinstance(message, AlertRaised):
        return replace(state, alert=message.message)

    if isinstance(message, AlertDismissed):
        return replace(state, alert=None)

    if isinstance(message, SidebarToggled):
        visible = not state.sidebar_visible if message.visible is None else message.visible
        return replace(state, sidebar_visible=visible)

    raise TypeError(f"Unknown session message: {message!r}")


def _log_store_error(action: str, error: DatabaseError) -> None:
    if isinstance(error, QueryError):
        logger.error(f"Store error {action}: {error} (sqlstate={error.sqlstate}, details={error.details})")
    else:
        logger.error(f"Store error {action}: {error}")


class RemixSession:
    """
    Controller for one remix session.

    Each operation catches failures at its boundary and turns them into a
    user-visible message on the state; none of them raise.
    """

    def __init__(self, gateway: PersistenceGateway, ai_service: Optional[CompletionService] = None,
                 state: Optional[SessionState] = None):
        self.gateway = gateway
        self.ai_service = ai_service or AIService()
        self.state = state or SessionState()

    def dispatch(self, message: Message) -> SessionState:
        self.state = reduce(self.state, message)
        return self.state

    def set_input(self, text: str) -> SessionState:
        return self.dispatch(InputChanged(text))

    def generate(self) -> bool:
        """
        Generate posts from the current input text.

        Returns:
            bool: True if posts were generated, False otherwise.
        """
        if self.state.is_loading:
            logger.warning("Generation already in progress; ignoring request")
            return False

        try:
            prompt = build_prompt(self.state.input_text)
        except ValidationError as e:
            logger.warning(f"Generation rejected: {e}")
            self.dispatch(AlertRaised(e.user_message))
            return False

        self.dispatch(GenerationRequested())

        try:
            raw_text = self.ai_service.generate_completion(prompt)
            result = parse_response(raw_text)
            if isinstance(result, Unparseable):
                raise UnparseableResponseError(
                    f"No post markers in model response: '{result.raw_text[:80]}'"
                )
        except AIServiceError as e:
            logger.error(f"Generation failed: {e}")
            self.dispatch(GenerationFailed(e.user_message))
            return False
        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            self.dispatch(GenerationFailed(UNEXPECTED_ERROR_MESSAGE))
            return False

        self.dispatch(GenerationSucceeded(result.posts))
        logger.info(f"Generated {len(result.posts)} posts")
        return True

    def load_saved_posts(self) -> bool:
        """
        Refresh the saved posts list from the store.

        Returns:
            bool: True if the list was loaded, False otherwise.
        """
        self.dispatch(SavedListRequested())

        try:
            saved_posts = self.gateway.list_posts()
        except DatabaseError as e:
            _log_store_error("listing saved posts", e)
            self.dispatch(SavedListFailed(e.user_message))
            return False
        except Exception as e:
            logger.error(f"Unexpected error listing saved posts: {e}", exc_info=True)
            self.dispatch(SavedListFailed(UNEXPECTED_ERROR_MESSAGE))
            return False

        self.dispatch(SavedListLoaded(saved_posts))
        return True

    def save_post(self, post: Union[Post, str]) -> Optional[SavedPost]:
        """
        Save a generated post.

        Args:
            post: A generated Post or raw content string.

        Returns:
            Optional[SavedPost]: The saved record, or None if saving failed.
        """
        content = post.content if isinstance(post, Post) else post

        try:
            saved = self.gateway.save_post(content)
        except ValidationError as e:
            logger.warning(f"Save rejected: {e}")
            self.dispatch(AlertRaised(e.user_message))
            return None
        except DatabaseError as e:
            _log_store_error("saving post", e)
            self.dispatch(AlertRaised(e.user_message))
            return None
        except Exception as e:
            logger.error(f"Unexpected error saving post: {e}", exc_info=True)
            self.dispatch(AlertRaised(UNEXPECTED_ERROR_MESSAGE))
            return None

        self.dispatch(PostSaved(saved))
        return saved

    def delete_post(self, saved_post_id: int) -> bool:
        """
        Delete a saved post.

        Args:
            saved_post_id: The ID of the saved post.

        Returns:
            bool: True if the post was deleted, False otherwise.
        """
        try:
            self.gateway.delete_post(saved_post_id)
        except DatabaseError as e:
            _log_store_error(f"deleting post {saved_post_id}", e)
            self.dispatch(AlertRaised(e.user_message))
            return False
        except Exception as e:
            logger.error(f"Unexpected error deleting post {saved_post_id}: {e}", exc_info=True)
            self.dispatch(AlertRaised(UNEXPECTED_ERROR_MESSAGE))
            return False

        self.dispatch(PostDeleted(saved_post_id))
        return True

    def toggle_sidebar(self, visible: Optional[bool] = None) -> SessionState:
        return self.dispatch(SidebarToggled(visible))
