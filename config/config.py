import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Optional, Any
from dotenv import load_dotenv


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_console: bool = True
    colorize: bool = False
    service_name: str = "content-bus"


@dataclass
class StorageConfig:
    """Object store configuration.

    Credentials are optional; without them the ambient role is used.
    """

    endpoint: str = "s3.amazonaws.com"
    secure: bool = True
    region: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    code_bucket: str = "helix-code-bus"
    template_bucket: str = "helix-content-bus"
    bucket_prefix: str = "h3"


@dataclass
class CompressionConfig:
    """Compression configuration.

    encoding picks the codec for new objects (gzip or zstd). gzip_level is the
    zlib level; default_level is the zstd level (0-3).
    """

    encoding: str = "gzip"
    gzip_level: int = 6
    default_level: int = 2


@dataclass
class ContentProxyConfig:
    """Upstream content proxy configuration."""

    url: str = "https://helix-pages.anywhere.run/helix-services/content-proxy@v2"
    timeout_ms: int = 20000


@dataclass
class Config:
    """Main configuration container."""

    version: str = "2.0.0"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    compression: CompressionConfig = field(default_factory=CompressionConfig)
    content_proxy: ContentProxyConfig = field(default_factory=ContentProxyConfig)


# Environment names used by existing deployments
ENV_ALIASES: Dict[str, str] = {
    "storage.region": "AWS_S3_REGION",
    "storage.access_key": "AWS_S3_ACCESS_KEY_ID",
    "storage.secret_key": "AWS_S3_SECRET_ACCESS_KEY",
    "content_proxy.timeout_ms": "HTTP_TIMEOUT_EXTERNAL",
}


class ConfigLoader:
    """Viper-style configuration loader.

    Loads configuration from:
    1. YAML files (lowest priority)
    2. .env files
    3. Environment variables (highest priority)
    """

    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self.config_name = "config"
        self.config_paths = [".", "config", "/etc/content-bus"]
        self.env_prefix = "CONTENT_BUS"
        self.auto_env = True
        self._environ = environ
        self._raw_config: Dict[str, Any] = {}

    def read_config(self) -> Config:
        """Read configuration from all sources, lowest priority first."""
        config_file = self._find_config_file()
        if config_file is not None:
            with open(config_file, "r", encoding="utf-8") as f:
                self._raw_config = yaml.safe_load(f) or {}

        if self._environ is None:
            self._load_env_files()

        config = self._build_config()
        self._validate(config)
        return config

    def _find_config_file(self) -> Optional[Path]:
        """First config.yaml / config.yml along config_paths, if any."""
        candidates = (
            Path(path) / f"{self.config_name}.{ext}"
            for path in self.config_paths
            for ext in ("yaml", "yml")
        )
        return next((candidate for candidate in candidates if candidate.exists()), None)

    def _load_env_files(self) -> None:
        """Load .env then .env.local; later files override earlier ones."""
        for env_file in (".env", ".env.local"):
            for path in self.config_paths:
                env_path = Path(path) / env_file
                if env_path.exists():
                    load_dotenv(env_path, override=True)

    def _getenv(self, key: str) -> Optional[str]:
        environ = os.environ if self._environ is None else self._environ
        return environ.get(key) or None

    def _get_env(self, key: str) -> Optional[str]:
        """Environment value for a dotted key.

        "storage.endpoint" is read from CONTENT_BUS_STORAGE_ENDPOINT, then
        from the legacy name in ENV_ALIASES.
        """
        if not self.auto_env:
            return None

        env_key = f"{self.env_prefix}_{key.replace('.', '_').upper()}"
        value = self._getenv(env_key)
        if value is None and key in ENV_ALIASES:
            value = self._getenv(ENV_ALIASES[key])
        return value

    @staticmethod
    def _coerce(raw: str, default: Any) -> Any:
        """Convert an environment string to the type of its default."""
        if isinstance(default, bool):
            return raw.lower() in ("true", "1", "yes")
        if isinstance(default, int):
            try:
                return int(raw)
            except ValueError:
                return default
        return raw

    def _lookup_yaml(self, key: str) -> Any:
        node: Any = self._raw_config
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def _get_value(self, key: str, default: Any = None) -> Any:
        """Get value with priority: env > yaml > default."""
        env_value = self._get_env(key)
        if env_value is not None:
            return self._coerce(env_value, default)

        value = self._lookup_yaml(key)
        return default if value is None else value

    def _build_config(self) -> Config:
        """Build Config object from loaded values."""
        return Config(
            version=self._get_value("version", "2.0.0"),
            logging=LoggingConfig(
                level=self._get_value("logging.level", "INFO"),
                enable_console=self._get_value("logging.enable_console", True),
                colorize=self._get_value("logging.colorize", False),
                service_name=self._get_value("logging.service_name", "content-bus"),
            ),
            storage=StorageConfig(
                endpoint=self._get_value("storage.endpoint", "s3.amazonaws.com"),
                secure=self._get_value("storage.secure", True),
                region=self._get_value("storage.region", None),
                access_key=self._get_value("storage.access_key", None),
                secret_key=self._get_value("storage.secret_key", None),
                code_bucket=self._get_value("storage.code_bucket", "helix-code-bus"),
                template_bucket=self._get_value(
                    "storage.template_bucket", "helix-content-bus"
                ),
                bucket_prefix=self._get_value("storage.bucket_prefix", "h3"),
            ),
            compression=CompressionConfig(
                encoding=self._get_value("compression.encoding", "gzip"),
                gzip_level=self._get_value("compression.gzip_level", 6),
                default_level=self._get_value("compression.default_level", 2),
            ),
            content_proxy=ContentProxyConfig(
                url=self._get_value(
                    "content_proxy.url",
                    "https://helix-pages.anywhere.run/helix-services/content-proxy@v2",
                ),
                timeout_ms=self._get_value("content_proxy.timeout_ms", 20000),
            ),
        )

    def _validate(self, config: Config) -> None:
        """Validate configuration."""
        errors = []

        if not config.storage.endpoint:
            errors.append("storage.endpoint is required")

        if bool(config.storage.access_key) != bool(config.storage.secret_key):
            errors.append("storage.access_key and storage.secret_key must be set together")

        if not config.content_proxy.url:
            errors.append("content_proxy.url is required")

        if config.compression.encoding not in ("gzip", "zstd"):
            errors.append("compression.encoding must be gzip or zstd")

        if not 0 <= config.compression.gzip_level <= 9:
            errors.append("compression.gzip_level must be between 0 and 9")

        if config.content_proxy.timeout_ms <= 0:
            errors.append("content_proxy.timeout_ms must be positive")

        if errors:
            raise ValueError(
                f"Configuration validation failed:\n"
                + "\n".join(f"  - {e}" for e in errors)
            )


def load_config(environ: Optional[Dict[str, str]] = None) -> Config:
    """Load configuration.

    Args:
        environ: Environment mapping to read instead of os.environ (skips .env files)

    Returns:
        Config object
    """
    return ConfigLoader(environ).read_config()
