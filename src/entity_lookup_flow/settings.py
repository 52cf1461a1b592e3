"""Default settings for entity-lookup-flow.

Maps to keys in config.example.yaml. Override via config.local.yaml.
"""

from pathlib import Path

from platformdirs import user_data_dir

# Platform-appropriate directories (resolved by platformdirs)
data_dir = Path(user_data_dir("entity-lookup-flow"))

# Records file used when none is configured
records_path = data_dir / "records.yaml"

# Server defaults
server_host = "127.0.0.1"
server_port = 9848
