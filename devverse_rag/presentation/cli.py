import asyncio
import logging
import subprocess
import sys

from devverse_rag.config.settings import settings
from devverse_rag.container import configure_container, container
from devverse_rag.core.services.chat_service import ChatService
from devverse_rag.core.services.ingest_service import IngestService

logger = logging.getLogger(__name__)


def cmd_ingest() -> int:
    """Ingest command - vectorize the content folder."""
    configure_container(settings)
    ingest_service = container.resolve(IngestService)

    try:
        report = asyncio.run(ingest_service.run())
    except Exception as e:
        logger.error(f"Vectorization failed: {e}")
        return 1

    logger.info(
        f"Indexed {report.chunks} chunks from {report.documents} articles "
        f"in {report.batches} batches"
    )
    return 0


def cmd_ask(question: str) -> int:
    """Ask command - one question, answer printed to stdout."""
    question = question.strip()
    if not question:
        print("Message is required.")
        return 1

    configure_container(settings)
    chat_service = container.resolve(ChatService)

    try:
        response = asyncio.run(chat_service.build_chat_response(question))
    except Exception as e:
        logger.error(f"Failed to generate a response: {e}")
        return 1

    print(response.answer)
    return 0


def cmd_serve(host: str = "0.0.0.0", port: str = "8000") -> int:
    """Serve command - run the HTTP API."""
    logger.info("Starting API server...")
    return subprocess.run(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "devverse_rag.presentation.api:app",
            "--host",
            host,
            "--port",
            port,
        ]
    ).returncode


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=settings.log_level, format="%(message)s")

    if not argv:
        print("Usage: python -m devverse_rag.presentation.cli <command>")
        print("Commands: ingest, ask <question>, serve")
        return 1

    command = argv[0]

    if command == "ingest":
        return cmd_ingest()
    if command == "ask":
        return cmd_ask(" ".join(argv[1:]))
    if command == "serve":
        return cmd_serve(*argv[1:3])

    print(f"Unknown command: {command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
