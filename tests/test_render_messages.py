from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from spec2cpp.config import GeneratorConfig
from spec2cpp.model import Notification, Request
from spec2cpp.render_messages import render_notification, render_request, symbol_name


class SymbolNameTests(unittest.TestCase):
    def test_concatenates_segments(self) -> None:
        self.assertEqual(symbol_name("textDocument/didOpen"), "TextDocumentDidOpen")
        self.assertEqual(symbol_name("initialize"), "Initialize")

    def test_drops_reserved_prefixes(self) -> None:
        self.assertEqual(symbol_name("$/cancelRequest"), "CancelRequest")
        self.assertEqual(symbol_name("window/showMessage"), "ShowMessage")
        self.assertEqual(symbol_name("client/registerCapability"), "RegisterCapability")
        self.assertEqual(symbol_name("workspace/configuration"), "WorkspaceConfiguration")

    def test_custom_prefixes(self) -> None:
        self.assertEqual(symbol_name("workspace/configuration", ("workspace",)), "Configuration")


class RenderMessageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = GeneratorConfig()

    def test_notification(self) -> None:
        entry = Notification(method="textDocument/didOpen", params="DidOpenTextDocumentParams")
        self.assertEqual(
            render_notification(entry, self.config).splitlines(),
            [
                'inline constexpr char TextDocumentDidOpenName[] = "textDocument/didOpen";',
                "struct TextDocumentDidOpenNotification : public NotificationMessage<TextDocumentDidOpenName, DidOpenTextDocumentParams>",
                "{};",
            ],
        )

    def test_notification_without_params(self) -> None:
        rendered = render_notification(Notification(method="exit"), self.config)
        self.assertIn("NotificationMessage<ExitName, std::nullptr_t>", rendered)

    def test_request(self) -> None:
        entry = Request(method="textDocument/hover", params="HoverParams", result="std::variant<Hover, std::nullptr_t>")
        self.assertEqual(
            render_request(entry, self.config).splitlines(),
            [
                'inline constexpr char TextDocumentHoverName[] = "textDocument/hover";',
                "struct TextDocumentHoverRequest : public RequestMessage<TextDocumentHoverName, HoverParams, "
                "std::variant<Hover, std::nullptr_t>, std::nullptr_t>",
                "{};",
            ],
        )

    def test_request_defaults(self) -> None:
        config = GeneratorConfig(error_type="ResponseError", unit_type="Unit")
        rendered = render_request(Request(method="shutdown"), config)
        self.assertIn("RequestMessage<ShutdownName, Unit, Unit, ResponseError>", rendered)


if __name__ == "__main__":
    unittest.main()
