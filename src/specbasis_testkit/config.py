from pydantic import BaseModel, Field
from typing import Literal, Optional, List
import yaml, pathlib

class SpecConfig(BaseModel):
    spec_dir: str = Field("spec", description="Directory searched for spec files, relative to the project root")
    spec_files: List[str] = Field(default_factory=lambda: ["*_spec.py"], min_length=1, description="Glob patterns for spec modules")
    spec_classes: List[str] = Field(default_factory=lambda: ["Describe"], min_length=1, description="Name prefixes of suite classes")
    spec_functions: List[str] = Field(default_factory=lambda: ["it_"], min_length=1, description="Name prefixes of spec functions")
    helpers: List[str] = Field(default_factory=list, description="Plugin modules loaded before any spec, e.g. spec.helpers.fixtures")
    stop_on_failure: bool = Field(False)
    filter: Optional[str] = Field(None, description="pytest -k expression selecting specs by name")

class ReporterConfig(BaseModel):
    color: bool = Field(True)
    stack_indent: int = Field(4, ge=0, description="Spaces before each stack trace line in the failure digest")
    suppress_default_reporter: bool = Field(True, description="Disable pytest's own terminal reporter")

class AppConfig(BaseModel):
    spec: SpecConfig = Field(default_factory=SpecConfig)
    reporter: ReporterConfig = Field(default_factory=ReporterConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("INFO")

def load_config(path: str) -> AppConfig:
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return AppConfig.model_validate(data)

def dump_config(cfg: AppConfig) -> str:
    return yaml.safe_dump(cfg.model_dump(), sort_keys=False)
