"""
slang Language Server Protocol (LSP) Server.

This module implements an LSP server for the slang expression language
using pygls. It provides:

- Document synchronization (open, change, save, close)
- Diagnostics for every scanner and parser error
- Hover showing the parenthesized rendering of the document's expression

Usage:
    # Start the server in stdio mode (for IDE integration)
    slang-lsp

    # Start in TCP mode (for debugging)
    slang-lsp --tcp --port 2087
"""

import argparse
import logging
from typing import Optional

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from slang import __version__
from slang.lsp.analyzer import DocumentAnalyzer

logger = logging.getLogger("slang-lsp")


class SlangLanguageServer(LanguageServer):
    """
    Language Server Protocol implementation for slang.

    Each open document gets a ``DocumentAnalyzer``; it is rebuilt on every
    change since the server uses full text synchronization.
    """

    def __init__(self) -> None:
        super().__init__(
            name="slang-lsp",
            version=f"v{__version__}",
            text_document_sync_kind=types.TextDocumentSyncKind.Full,
        )

        # Document analyzers cache (uri -> analyzer)
        self._analyzers: dict[str, DocumentAnalyzer] = {}

        self._register_handlers()

    def _register_handlers(self) -> None:
        """
        Register all LSP request and notification handlers.

        pygls tags each handler with attributes, so handlers are plain
        functions delegating to the server's methods.
        """

        # Document synchronization
        @self.feature(types.TEXT_DOCUMENT_DID_OPEN)
        def did_open(params: types.DidOpenTextDocumentParams) -> None:
            self._on_did_open(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CHANGE)
        def did_change(params: types.DidChangeTextDocumentParams) -> None:
            self._on_did_change(params)

        @self.feature(types.TEXT_DOCUMENT_DID_SAVE)
        def did_save(params: types.DidSaveTextDocumentParams) -> None:
            self._on_did_save(params)

        @self.feature(types.TEXT_DOCUMENT_DID_CLOSE)
        def did_close(params: types.DidCloseTextDocumentParams) -> None:
            self._on_did_close(params)

        # Hover
        @self.feature(types.TEXT_DOCUMENT_HOVER)
        def hover(params: types.HoverParams) -> Optional[types.Hover]:
            return self._on_hover(params)

    def _get_analyzer(self, uri: str) -> Optional[DocumentAnalyzer]:
        return self._analyzers.get(uri)

    def _analyze_document(self, uri: str, text: str) -> DocumentAnalyzer:
        """Analyze a document and cache the result."""
        analyzer = DocumentAnalyzer(text, uri)
        analyzer.analyze()
        self._analyzers[uri] = analyzer
        logger.debug(f"Analyzed {uri}: {len(analyzer.diagnostics)} diagnostic(s)")
        return analyzer

    def _publish_diagnostics(self, uri: str, diagnostics: list[types.Diagnostic]) -> None:
        """Publish diagnostics to the client."""
        self.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
        )

    # =========================================================================
    # Document Synchronization
    # =========================================================================

    def _on_did_open(self, params: types.DidOpenTextDocumentParams) -> None:
        """Handle document open notification."""
        document = params.text_document
        logger.info(f"Document opened: {document.uri}")

        analyzer = self._analyze_document(document.uri, document.text)
        self._publish_diagnostics(document.uri, analyzer.diagnostics)

    def _on_did_change(self, params: types.DidChangeTextDocumentParams) -> None:
        """Handle document change notification."""
        uri = params.text_document.uri
        doc = self.workspace.get_text_document(uri)

        analyzer = self._analyze_document(uri, doc.source)
        self._publish_diagnostics(uri, analyzer.diagnostics)

    def _on_did_save(self, params: types.DidSaveTextDocumentParams) -> None:
        """Handle document save notification."""
        uri = params.text_document.uri
        logger.info(f"Document saved: {uri}")

        doc = self.workspace.get_text_document(uri)
        if doc:
            analyzer = self._analyze_document(uri, doc.source)
            self._publish_diagnostics(uri, analyzer.diagnostics)

    def _on_did_close(self, params: types.DidCloseTextDocumentParams) -> None:
        """Handle document close notification."""
        uri = params.text_document.uri
        logger.info(f"Document closed: {uri}")

        self._analyzers.pop(uri, None)
        self._publish_diagnostics(uri, [])

    # =========================================================================
    # Hover
    # =========================================================================

    def _on_hover(self, params: types.HoverParams) -> Optional[types.Hover]:
        """Handle hover request."""
        analyzer = self._get_analyzer(params.text_document.uri)
        if analyzer is None:
            return None

        return analyzer.get_hover(params.position.line, params.position.character)


# =============================================================================
# Server Creation and Main Entry Point
# =============================================================================


def create_server() -> SlangLanguageServer:
    """Create and configure a slang language server instance."""
    server = SlangLanguageServer()

    @server.feature(types.INITIALIZED)
    def on_initialized(
        params: types.InitializedParams,  # noqa: ARG001
    ) -> None:
        logger.info("slang Language Server initialized successfully")

    @server.feature(types.SHUTDOWN)
    def on_shutdown(
        params: None,  # noqa: ARG001
    ) -> None:
        logger.info("Shutting down slang Language Server")

    return server


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="slang Language Server",
        prog="slang-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the slang language server.

    Starts the server in stdio mode for IDE integration, or on a TCP
    socket with ``--tcp``.
    """
    args = create_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    log_level = getattr(logging, args.log_level.upper())
    logging.getLogger("slang-lsp").setLevel(log_level)
    logging.getLogger("slang").setLevel(log_level)

    server = create_server()

    if args.tcp:
        logger.info(f"Starting slang LSP in TCP mode on {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Starting slang LSP in stdio mode")
        server.start_io()


if __name__ == "__main__":
    main()
