"""
Post Remixer Application

This is the main entry point for the Post Remixer application.
It turns free-form text into short social media posts with an AI model,
and saves, lists, deletes and shares posts from a saved posts store.
"""

import sys
import argparse
import logging
import webbrowser
from typing import Optional, List

from config import settings
from config.validators import validate_settings, get_config_summary
from data.database import DatabaseConnection
from data.memory_store import InMemoryPostStore
from data.protocols import PostStore
from services.ai_service import AIService
from services.persistence_service import PersistenceGateway
from services.protocols import CompletionService
from services.response_parser import Post
from services.session import RemixSession
from utils.exceptions import RemixerError, ConfigurationError, DatabaseError
from utils.helpers import build_share_url, format_remaining
from utils.logger import get_logger, setup_file_logging

# Set up logging
logger = get_logger(__name__)

STORE_CHOICES = ["database", "memory"]


def create_store(kind: str) -> PostStore:
    """Create the saved posts store for the given kind."""
    if kind == "memory":
        return InMemoryPostStore()
    return DatabaseConnection()


class PostRemixer:
    """
    Main application class for the Post Remixer.

    This class wires the store, gateway and AI service into one session
    and exposes the operations the command line calls.
    """

    def __init__(self, store: Optional[PostStore] = None,
                 ai_service: Optional[CompletionService] = None,
                 store_kind: Optional[str] = None, validate: bool = True):
        """Initialize the Post Remixer application."""
        kind = store_kind or settings.DEFAULT_STORE

        # The database store is required at startup; the AI key only when generating
        if validate:
            validate_settings(require_store=store is None and kind == "database")

        self.store = store or create_store(kind)
        self.gateway = PersistenceGateway(self.store)
        self.session = RemixSession(self.gateway, ai_service or AIService())

        # One-shot connectivity check; the outcome is only logged
        test_connection = getattr(self.store, "test_connection", None)
        if test_connection:
            test_connection()

    def close(self) -> None:
        close = getattr(self.store, "close", None)
        if close:
            close()

    def generate(self, text: str) -> List[Post]:
        """
        Generate posts from text.

        Returns:
            List[Post]: The generated posts, empty on failure.
        """
        self.session.set_input(text)
        self.session.generate()
        return self.session.state.posts

    def save(self, content: str) -> bool:
        return self.session.save_post(content) is not None

    def list_saved(self) -> bool:
        return self.session.load_saved_posts()

    def delete(self, saved_post_id: int) -> bool:
        return self.session.delete_post(saved_post_id)

    def share_url_for_saved(self, saved_post_id: int) -> Optional[str]:
        """Build the share link for a saved post, loading the list if needed."""
        if not self.session.load_saved_posts():
            return None
        for saved in self.session.state.saved_posts:
            if saved.id == saved_post_id:
                return build_share_url(saved.content)
        logger.warning(f"No saved post with ID {saved_post_id}")
        return None


# =============================================================================
# Output
# =============================================================================

def print_posts(posts: List[Post]) -> None:
    for number, post in enumerate(posts, start=1):
        print(f"[POST {number}]")
        for segment in post.segments:
            print(f"  {segment}")
        print(f"  ({format_remaining(post.remaining_chars)})")
        print()


def print_saved_posts(remixer: PostRemixer) -> None:
    saved_posts = remixer.session.state.saved_posts
    if not saved_posts:
        print("No saved posts.")
        return
    for saved in saved_posts:
        print(f"#{saved.id}  {saved.created_at:%Y-%m-%d %H:%M}")
        for segment in saved.segments:
            print(f"  {segment}")
        print()


def report_session_messages(remixer: PostRemixer) -> None:
    state = remixer.session.state
    if state.error:
        print(f"Error: {state.error}", file=sys.stderr)
    if state.alert:
        print(f"Error: {state.alert}", file=sys.stderr)


def share(url: str, open_browser: bool) -> None:
    print(url)
    if open_browser:
        webbrowser.open_new_tab(url)


# =============================================================================
# Command line
# =============================================================================

def read_text(text: Optional[str], file_path: Optional[str]) -> str:
    """Read source text from an argument, a file, or stdin."""
    if file_path:
        with open(file_path, "r", encoding="utf-8") as f:
            return f.read()
    if text and text != "-":
        return text
    return sys.stdin.read()


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Post Remixer Application')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default='WARNING', help='Logging level')
    parser.add_argument('--store', type=str, choices=STORE_CHOICES, default=None,
                        help='Saved posts store (default: REMIXER_STORE or database)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate', help='Remix text into posts')
    generate.add_argument('text', nargs='?', default=None, help='Source text, or - to read stdin')
    generate.add_argument('--file', type=str, default=None, help='Read source text from a file')
    generate.add_argument('--save', type=int, nargs='*', default=[], metavar='N',
                          help='Save the generated posts with these numbers (1-based)')
    generate.add_argument('--share', type=int, default=None, metavar='N',
                          help='Print the share link for post N')
    generate.add_argument('--open', action='store_true', help='Open the share link in a browser')

    subparsers.add_parser('list', help='List saved posts')

    save = subparsers.add_parser('save', help='Save post content directly')
    save.add_argument('content', help='Post content, segments separated by |')

    delete = subparsers.add_parser('delete', help='Delete a saved post')
    delete.add_argument('id', type=int, help='Saved post ID')

    share_cmd = subparsers.add_parser('share', help='Print the share link for a saved post')
    share_cmd.add_argument('id', type=int, help='Saved post ID')
    share_cmd.add_argument('--open', action='store_true', help='Open the share link in a browser')

    subparsers.add_parser('init-db', help='Create the saved posts tables')

    return parser.parse_args(argv)


def run_command(remixer: PostRemixer, args) -> bool:
    """Run one command; returns True on success."""
    if args.command == 'generate':
        posts = remixer.generate(read_text(args.text, args.file))
        if not posts:
            return False
        print_posts(posts)

        success = True
        for number in args.save:
            if not 1 <= number <= len(posts):
                logger.warning(f"No generated post number {number}")
                success = False
                continue
            saved = remixer.session.save_post(posts[number - 1])
            if saved:
                print(f"Saved post {number} as #{saved.id}")
            else:
                success = False

        if args.share is not None:
            if 1 <= args.share <= len(posts):
                share(build_share_url(posts[args.share - 1].content), args.open)
            else:
                logger.warning(f"No generated post number {args.share}")
                success = False
        return success

    if args.command == 'list':
        if not remixer.list_saved():
            return False
        print_saved_posts(remixer)
        return True

    if args.command == 'save':
        return remixer.save(args.content)

    if args.command == 'delete':
        return remixer.delete(args.id)

    if args.command == 'share':
        url = remixer.share_url_for_saved(args.id)
        if not url:
            return False
        share(url, args.open)
        return True

    if args.command == 'init-db':
        if not isinstance(remixer.store, DatabaseConnection):
            logger.info("Memory store has no schema to initialize")
            return True
        version = remixer.store.ensure_schema()
        print(f"Saved posts schema at version {version}")
        return True

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.info("Starting Post Remixer application")
    logger.debug(f"Configuration: {get_config_summary()}")

    remixer = None
    try:
        remixer = PostRemixer(store_kind=args.store)
        success = run_command(remixer, args)
        report_session_messages(remixer)
        exit_code = 0 if success else 1

    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(str(e), file=sys.stderr)
        exit_code = 2
    except DatabaseError as e:
        logger.error(f"Database error: {e}", exc_info=True)
        print(f"Error: {e.user_message}", file=sys.stderr)
        exit_code = 1
    except RemixerError as e:
        logger.error(f"Post Remixer error: {e}", exc_info=True)
        print(f"Error: {e.user_message}", file=sys.stderr)
        exit_code = 1
    except Exception as e:
        logger.error(f"Unhandled exception in Post Remixer: {e}", exc_info=True)
        exit_code = 2
    finally:
        if remixer:
            remixer.close()

    logger.info(f"Post Remixer application finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
