import json
import os
import logging
from pydantic import BaseModel, Field
from typing import Mapping, Optional

from .constants import DEFAULT_HOSTNAME

ENV_PREFIX = 'PHANT_'

class ConsoleLoggingConfig(BaseModel):
    enabled: bool = True
    level: str = 'INFO'
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format: str = '%Y-%m-%d %H:%M:%S'

    def get_level(self) -> int:
        return getattr(logging, self.level.upper())

class FileLoggingConfig(ConsoleLoggingConfig):
    enabled: bool = False
    level: str = 'DEBUG'
    log_dir: str = 'logs'
    filename: str = 'phant_sdk.log'
    max_bytes: int = 10485760  # 10MB
    backup_count: int = 5

class LoggingConfig(BaseModel):
    level: str = 'WARNING'  # threshold of the phant_sdk logger itself
    propagate: bool = True
    console: ConsoleLoggingConfig = Field(default_factory=ConsoleLoggingConfig)
    file: FileLoggingConfig = Field(default_factory=FileLoggingConfig)

    def get_level(self) -> int:
        return getattr(logging, self.level.upper())

class StreamConfig(BaseModel):
    hostname: str = DEFAULT_HOSTNAME
    public_key: str
    private_key: str
    delete_key: Optional[str] = None

class TransportConfig(BaseModel):
    timeout: Optional[float] = None  # seconds, None keeps the HTTP library default

class ConfigModel(BaseModel):
    stream: StreamConfig
    transport: TransportConfig = Field(default_factory=TransportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

class PhantConfig:
    """
    Client configuration loaded from a JSON file.

    PHANT_HOSTNAME, PHANT_PUBLIC_KEY, PHANT_PRIVATE_KEY and PHANT_DELETE_KEY
    in the environment override the stream section of the file.

    Raises:
        FileNotFoundError: config_path does not exist
        ValueError: the file is not a JSON object
        ValidationError: the content does not match ConfigModel
    """

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None):
        config_data = self._load_config(config_path) if config_path else {}
        environ = os.environ if environ is None else environ

        stream = config_data.get('stream')
        if stream is None:
            stream = {}
        if isinstance(stream, dict):
            stream = dict(stream)
            for field_name in StreamConfig.model_fields:
                value = environ.get(ENV_PREFIX + field_name.upper())
                if value:
                    stream[field_name] = value
        config_data['stream'] = stream

        self._config = ConfigModel(**config_data)

    @staticmethod
    def _load_config(config_path: str) -> dict:
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Config file {config_path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must hold a JSON object, got {type(data).__name__}")
        return data

    def setup_logging(self):
        """Route the SDK's log records as described by the logging section"""
        from .logger import configure_logging
        return configure_logging(self._config.logging)

    def __getattr__(self, name: str):
        # Delegate attribute access to the Pydantic model
        if name == '_config':
            raise AttributeError(name)
        return getattr(self._config, name)
