from .core import process_value, process_assignment
from .parser import extract_attribute_stacks, split_attribute_name, parse_array_literal
from .resolver import resolve_selector, is_scalar, is_pure_list, is_formattable
from .formatting import convert_format, evaluate, sprintf, to_text
