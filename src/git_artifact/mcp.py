# src/git_artifact/mcp.py
from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, TextIO

from jsonschema import validate, ValidationError

from .util.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ToolSpec:
    name: str
    title: str
    description: str
    input_schema: Dict[str, Any]
    output_schema: Optional[Dict[str, Any]]
    handler: Callable[[Dict[str, Any]], Dict[str, Any]]


class MCPServer:
    """
    Minimal MCP over JSON-RPC via stdio:
    - initialize / notifications/initialized / shutdown / exit
    - tools/list, tools/call
    """

    def __init__(
        self,
        server_name: str = "git-artifact-mcp",
        server_version: str = "0.0.0",
        *,
        out: Optional[TextIO] = None,
    ) -> None:
        self._tools: Dict[str, ToolSpec] = {}
        self._server_name = server_name
        self._server_version = server_version
        self._out = out
        self._capabilities = {"tools": {}}

    def register(self, spec: ToolSpec) -> None:
        self._tools[spec.name] = spec

    @property
    def tools(self) -> Dict[str, ToolSpec]:
        return dict(self._tools)

    # ---- low-level io ----
    def _send(self, obj: Dict[str, Any]) -> None:
        out = self._out or sys.stdout
        out.write(json.dumps(obj, separators=(",", ":")) + "\n")
        out.flush()

    def _send_error(self, id_val: Any, code: int, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        self._send({
            "jsonrpc": "2.0",
            "id": id_val,
            "error": {"code": code, "message": message, "data": data or {}}
        })

    def _send_result(self, id_val: Any, result: Any) -> None:
        self._send({"jsonrpc": "2.0", "id": id_val, "result": result})

    # ---- protocol handlers ----
    def _handle_initialize(self, msg: Dict[str, Any]) -> None:
        result = {
            "protocolVersion": "0.1",
            "serverInfo": {"name": self._server_name, "version": self._server_version},
            "capabilities": self._capabilities,
        }
        self._send_result(msg.get("id"), result)

    def _handle_tools_list(self, msg: Dict[str, Any]) -> None:
        result = {
            "tools": [
                {
                    "name": t.name,
                    "title": t.title,
                    "description": t.description,
                    "inputSchema": t.input_schema,
                    **({"outputSchema": t.output_schema} if t.output_schema else {})
                }
                for t in self._tools.values()
            ]
        }
        self._send_result(msg.get("id"), result)

    def _handle_tools_call(self, msg: Dict[str, Any]) -> None:
        params = msg.get("params") or {}
        name = params.get("name")
        args = params.get("arguments") or {}

        if not name or name not in self._tools:
            self._send_error(msg.get("id"), -32601, f"Unknown tool: {name}")
            return

        spec = self._tools[name]
        try:
            validate(instance=args, schema=spec.input_schema)
        except ValidationError as ve:
            self._send_error(msg.get("id"), -32602, "Invalid params", {"detail": ve.message})
            return

        try:
            out = spec.handler(args)
        except Exception as ex:
            logger.exception("tool %s failed", name)
            self._send_result(msg.get("id"), {
                "content": [{"type": "text", "text": str(ex)}],
                "isError": True
            })
            return

        if spec.output_schema and not out.get("isError"):
            try:
                structured = out.get("structuredContent")
                if structured is not None:
                    validate(instance=structured, schema=spec.output_schema)
            except ValidationError as ve:
                self._send_result(msg.get("id"), {
                    "content": [{"type": "text", "text": f"Output schema validation failed: {ve.message}"}],
                    "isError": True
                })
                return

        self._send_result(msg.get("id"), out)

    def handle(self, msg: Dict[str, Any]) -> bool:
        """Dispatch one message; returns False when the client asked to exit."""
        method = msg.get("method")
        if method == "initialize":
            self._handle_initialize(msg)
        elif method == "notifications/initialized":
            # notifications get no response
            pass
        elif method == "shutdown":
            self._send_result(msg.get("id"), None)
        elif method == "tools/list":
            self._handle_tools_list(msg)
        elif method == "tools/call":
            self._handle_tools_call(msg)
        elif method == "exit":
            return False
        else:
            self._send_error(msg.get("id"), -32601, f"Unknown method: {method}")
        return True

    # ---- main loop ----
    def run_stdio(self, stdin: Optional[TextIO] = None) -> None:
        logger.info("mcp server ready")
        for line in stdin or sys.stdin:
            line = line.strip()
            if not line:
                continue
            try:
                msg = json.loads(line)
            except json.JSONDecodeError:
                self._send_error(None, -32700, "Parse error")
                continue
            if not self.handle(msg):
                break
