# src/ctxgate/config.py

DEFAULT_FORMAT = "<{path}>\n```\n{content}\n```\n</{path}>\n\n"

DEFAULT_EXCLUDES = ",".join([
    ".exe", ".bin", ".obj", ".o", ".a", ".lib", ".so", ".dll", ".dylib",
    ".class", ".jar", ".pyc", ".pyo", ".pyd",
    ".zip", ".tar", ".gz", ".rar", ".7z",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".svg", ".ico",
    ".mp3", ".wav", ".ogg", ".mp4", ".avi", ".mov",
    ".iso", ".img", ".dmg", ".db", ".sqlite", ".log",
])

DEFAULT_EXCLUDE_NAMES = ",".join([
    ".git", ".hg", ".svn",
    "node_modules", "bower_components", "vendor",
    "venv", ".venv", "__pycache__",
    "target", "dist", "build", "out", "tmp", "coverage",
    "package-lock.json", "yarn.lock", "go.sum",
])

DEFAULT_MODEL = "gpt-4o"
DEFAULT_ENCODING = "cl100k_base"

# name -> limits and the tiktoken encoding used to count its tokens
MODEL_REGISTRY = {
    "gpt-4o": {"input_limit": 128_000, "output_limit": 16_384, "encoding": "o200k_base"},
    "gpt-4o-mini": {"input_limit": 128_000, "output_limit": 16_384, "encoding": "o200k_base"},
    "gpt-4.1": {"input_limit": 1_047_576, "output_limit": 32_768, "encoding": "o200k_base"},
    "o3": {"input_limit": 200_000, "output_limit": 100_000, "encoding": "o200k_base"},
    "gpt-4-turbo": {"input_limit": 128_000, "output_limit": 4_096, "encoding": "cl100k_base"},
    "gemini-2.5-pro": {"input_limit": 1_048_576, "output_limit": 65_536, "encoding": DEFAULT_ENCODING},
    "gemini-2.5-flash": {"input_limit": 1_048_576, "output_limit": 65_536, "encoding": DEFAULT_ENCODING},
}

LOG_FORMAT = "%(levelname)s: %(message)s"
LOG_LEVELS = ("debug", "info", "warn", "error")
