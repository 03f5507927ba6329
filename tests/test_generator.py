from __future__ import annotations

import copy
import sys
import tempfile
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from spec2cpp.config import GeneratorConfig
from spec2cpp.errors import ArtifactWriteError, DependencyCycleError, UnresolvedReferenceError
from spec2cpp.generator import generate, write_artifacts
from spec2cpp.model import (
    EnumKind,
    Enumeration,
    EnumValue,
    Interface,
    Model,
    Notification,
    Property,
    Request,
    TypeAlias,
)


def small_model() -> Model:
    return Model(
        enumerations=[
            Enumeration(name="E", kind=EnumKind.STRING, values=[EnumValue(name="foo", value="foo")]),
        ],
        interfaces=[Interface(name="I", members=[Property(name="x", type="int")])],
    )


def layered_model() -> Model:
    return Model(
        enumerations=[Enumeration(name="Kind", kind=EnumKind.NUMERIC, values=[EnumValue(name="a", value="1")])],
        aliases=[
            TypeAlias(name="Uri", value="std::string"),
            TypeAlias(name="Locations", value="std::vector<Location>", dependencies={"Location"}),
        ],
        interfaces=[
            Interface(
                name="Location",
                members=[Property(name="uri", type="Uri"), Property(name="kind", type="Kind")],
                dependencies={"Uri", "Kind"},
            ),
            Interface(name="Message"),
        ],
        notifications=[Notification(method="window/logMessage", params="LogMessageParams")],
        requests=[Request(method="workspace/symbol", result="Locations")],
    )


class GenerateTests(unittest.TestCase):
    def test_end_to_end_example(self) -> None:
        result = generate(small_model())
        types = result.artifacts["types.h"]
        bindings = result.artifacts["types_json.h"]

        self.assertLess(types.index("enum class E {"), types.index("struct I {"))
        self.assertIn("    Foo,", types)
        self.assertIn('JSONIFY_ENUM(E, {\n    {E::Foo, "foo"},\n})', bindings)
        self.assertIn("JSONIFY(I, x)", bindings)
        self.assertLess(bindings.index("JSONIFY_ENUM(E"), bindings.index("JSONIFY(I, x)"))

    def test_artifact_header_and_namespace(self) -> None:
        result = generate(small_model())
        self.assertEqual(sorted(result.artifacts), ["notifications.h", "requests.h", "types.h", "types_json.h"])
        for text in result.artifacts.values():
            lines = text.splitlines()
            self.assertEqual(lines[0], "// File generated by spec2cpp tool")
            self.assertEqual(lines[1], "// DO NOT MAKE ANY CHANGES HERE")
            self.assertIn("#pragma once", lines)
            self.assertIn("namespace Lsp {", lines)
            self.assertEqual(lines[-1], "}  // namespace Lsp")
        self.assertIn('#include "requestmessage.h"', result.artifacts["requests.h"])

    def test_declarations_follow_dependency_order(self) -> None:
        result = generate(layered_model())
        types = result.artifacts["types.h"]
        order = [
            types.index("enum class Kind {"),
            types.index("using Uri = std::string;"),
            types.index("struct Location {"),
            types.index("using Locations = std::vector<Location>;"),
        ]
        self.assertEqual(order, sorted(order))
        self.assertNotIn("struct Message", types)
        self.assertIn("reserved interface `Message`", result.removed)

    def test_messages(self) -> None:
        result = generate(layered_model())
        self.assertIn(
            "struct LogMessageNotification : public NotificationMessage<LogMessageName, LogMessageParams>",
            result.artifacts["notifications.h"],
        )
        self.assertIn(
            "struct WorkspaceSymbolRequest : public RequestMessage<WorkspaceSymbolName, std::nullptr_t, Locations, std::nullptr_t>",
            result.artifacts["requests.h"],
        )

    def test_output_is_deterministic(self) -> None:
        first = generate(layered_model()).artifacts
        second = generate(layered_model()).artifacts
        self.assertEqual(first, second)

    def test_generate_is_stable_on_normalized_model(self) -> None:
        model = layered_model()
        first = generate(model).artifacts
        self.assertEqual(generate(copy.deepcopy(model)).artifacts, first)

    def test_dependency_failures_propagate(self) -> None:
        model = small_model()
        model.interfaces[0].dependencies = {"Nowhere"}
        with self.assertRaises(UnresolvedReferenceError):
            generate(model)

        model = Model(
            interfaces=[
                Interface(name="A", dependencies={"B"}),
                Interface(name="B", dependencies={"A"}),
            ]
        )
        with self.assertRaises(DependencyCycleError):
            generate(model)

    def test_custom_configuration(self) -> None:
        config = GeneratorConfig(namespace="Proto", tool_name="gen", file_names={
            "types": "a.hpp", "types_json": "b.hpp", "notifications": "c.hpp", "requests": "d.hpp",
        })
        result = generate(small_model(), config)
        self.assertEqual(sorted(result.artifacts), ["a.hpp", "b.hpp", "c.hpp", "d.hpp"])
        self.assertTrue(result.artifacts["a.hpp"].startswith("// File generated by gen tool"))
        self.assertIn("namespace Proto {", result.artifacts["a.hpp"])


class WriteArtifactsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self.temp_dir.name)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_writes_and_checks(self) -> None:
        artifacts = generate(small_model()).artifacts
        output = self.root / "out"

        stale = write_artifacts(artifacts, output, check=True)
        self.assertEqual(len(stale), 4)
        self.assertFalse(output.exists())

        written = write_artifacts(artifacts, output)
        self.assertEqual(len(written), 4)
        self.assertEqual((output / "types.h").read_text(encoding="utf-8"), artifacts["types.h"])
        self.assertEqual(write_artifacts(artifacts, output, check=True), [])

    def test_write_failure_propagates(self) -> None:
        blocker = self.root / "blocker"
        blocker.write_text("", encoding="utf-8")
        with self.assertRaises(ArtifactWriteError) as ctx:
            write_artifacts({"types.h": "x"}, blocker / "sub")
        self.assertEqual(ctx.exception.path, blocker / "sub" / "types.h")

    def test_check_read_failure_propagates(self) -> None:
        output = self.root / "out"
        (output / "types.h").mkdir(parents=True)
        with self.assertRaises(ArtifactWriteError) as ctx:
            write_artifacts({"types.h": "x"}, output, check=True)
        self.assertEqual(ctx.exception.path, output / "types.h")

    def test_check_rejects_undecodable_artifact(self) -> None:
        output = self.root / "out"
        output.mkdir()
        (output / "types.h").write_bytes(b"\xff\xfe\xfd")
        with self.assertRaises(ArtifactWriteError):
            write_artifacts({"types.h": "x"}, output, check=True)


if __name__ == "__main__":
    unittest.main()
