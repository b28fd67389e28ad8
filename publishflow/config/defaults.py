"""Default file templates written by the remediation flows."""

from pathlib import Path

import yaml

from publishflow.config.models import PublishConfig

DEFAULT_GITIGNORE = """\
# Dependencies
node_modules/
.pnp
.pnp.js

# Deno
.deno/

# Build outputs
dist/
build/
out/
*.tsbuildinfo

# IDE
.vscode/
.idea/
*.swp
*.swo
*~

# OS
.DS_Store
Thumbs.db

# Environment variables
.env
.env.local
.env.*.local

# Logs
logs/
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# Testing
coverage/
.nyc_output/
"""

DEFAULT_INITIAL_COMMIT_MESSAGE = "Initial commit"

DEFAULT_MANIFEST_VERSION = "0.1.0"

DEFAULT_LICENSE = "MIT"

# Conventional JSR entry files, in order of preference
EXPORTS_CANDIDATES = ["mod.ts", "index.ts", "main.ts", "src/mod.ts"]

FALLBACK_EXPORTS = "./mod.ts"


def generate_config_yaml(config: PublishConfig | None = None) -> str:
    """Render a configuration as commented YAML."""
    config = config or PublishConfig()
    header = (
        "# publishflow configuration\n"
        "# Every key is optional; environment variables override values,\n"
        "# e.g. PUBLISHFLOW_NPM__ACCESS=restricted\n\n"
    )
    body = yaml.safe_dump(
        config.model_dump(mode="json"),
        sort_keys=False,
        default_flow_style=False,
    )
    return header + body


def write_default_config(project_root: Path, filename: str = "publishflow.yml") -> Path:
    """Write the default configuration file, never overwriting an existing one."""
    path = project_root / filename
    if not path.exists():
        path.write_text(generate_config_yaml(), encoding="utf-8")
    return path
