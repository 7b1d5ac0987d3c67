"""Services module - Stream decoding, planning and tool execution"""

from .agent_client import AgentClient, AgentStreamError
from .config_manager import ConfigManager
from .file_blocks import FileBlockTracker, extract_files
from .intent_parser import classify
from .ndjson import LineFramer, NDJSONDecoder, iter_lines, iter_ndjson, parse_ndjson
from .plan_heuristics import detect_complexity_and_steps

__all__ = [
    "AgentClient",
    "AgentStreamError",
    "ConfigManager",
    "FileBlockTracker",
    "extract_files",
    "classify",
    "LineFramer",
    "NDJSONDecoder",
    "iter_lines",
    "iter_ndjson",
    "parse_ndjson",
    "detect_complexity_and_steps",
]
