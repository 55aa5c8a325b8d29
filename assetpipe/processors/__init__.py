from .base import Processor, FunctionProcessor, ProcessorSpec
from .compressors import CssCompressor, JsCompressor
from .css_urls import CssUrlProcessor
from .directive import (
    Directive, DirectiveParser, DirectiveProcessor, DirectiveRegistry,
    ParsedSource, default_directives, split_arguments,
)
from .header import split_header
from .imports import ImportProcessor
from .less import LessProcessor
from .registry import ProcessorRegistry
from .safety import SafetyColonsProcessor

__all__ = [
    "Processor", "FunctionProcessor", "ProcessorSpec", "ProcessorRegistry",
    "Directive", "DirectiveParser", "DirectiveProcessor", "DirectiveRegistry",
    "ParsedSource", "default_directives", "split_arguments", "split_header",
    "ImportProcessor", "SafetyColonsProcessor", "CssCompressor", "JsCompressor",
    "CssUrlProcessor", "LessProcessor",
]
