"""
Loading templates from a folder and turning them into lxml trees and back.
"""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path

import lxml.html

from ..config import DEFAULT_CONFIG
from ..templating.exceptions import (
    FragmentStructureException,
    TemplateNotFoundException,
)
from .tree_utils import is_element

logger = logging.getLogger(__name__)

FULL_DOCUMENT_PATTERN = re.compile(r"^\s*(?:<!doctype[^>]*>\s*)?<html[\s>]", re.I)


class Document:
    """
    A parsed template.

    Full documents keep their <html> root (and doctype). Fragments are held
    under a synthetic container element which is never serialized.
    """

    def __init__(self, root, full=False):
        self.root = root
        self.full = full

    def serialize(self) -> str:
        if self.full:
            return lxml.html.tostring(self.root.getroottree(), encoding="unicode")

        parts = [html.escape(self.root.text or "", quote=False)]
        parts.extend(
            lxml.html.tostring(child, encoding="unicode") for child in self.root
        )
        return "".join(parts)


def serialize(document: Document) -> str:
    return document.serialize()


def rewrite_wrapper_tags(markup: str, config=DEFAULT_CONFIG) -> str:
    """
    Rename wrapper elements written with the marker as their name.

    HTML parsers do not open a tag starting with ":", so <: :foreach="x">
    and </:> are renamed to the configured wrapper tag before parsing.
    """
    pattern = re.compile(r"<(/?)" + re.escape(config.marker) + r"(?=[\s/>])")
    return pattern.sub(lambda m: f"<{m.group(1)}{config.wrapper}", markup)


def parse_document(markup: str, config=DEFAULT_CONFIG) -> Document:
    """Parse markup into a Document. Malformed markup is repaired, not rejected."""
    markup = rewrite_wrapper_tags(markup, config)
    if FULL_DOCUMENT_PATTERN.match(markup):
        return Document(lxml.html.document_fromstring(markup), full=True)
    return Document(lxml.html.fragment_fromstring(markup, create_parent="div"))


def parse_fragment(markup: str, config=DEFAULT_CONFIG):
    """
    Parse markup that must hold exactly one root element and return it.

    Raises:
      FragmentStructureException: if there are no or several root elements.
    """
    markup = rewrite_wrapper_tags(markup, config)
    roots = [
        node
        for node in lxml.html.fragments_fromstring(markup)
        if not isinstance(node, str) and is_element(node)
    ]
    if len(roots) != 1:
        raise FragmentStructureException(
            f"Fragment must have exactly one root element, found {len(roots)}; "
            "group several elements in a wrapper"
        )
    return roots[0]


class TemplateLoader:
    """Reads templates by file name from a template folder."""

    def __init__(self, folder: str | Path = "templates", config=DEFAULT_CONFIG):
        self.folder = Path(folder)
        self.config = config

    def path_for(self, name: str) -> Path:
        folder = self.folder.resolve()
        path = (folder / name).resolve()
        if not path.is_relative_to(folder):
            raise TemplateNotFoundException(name, "is outside the template folder")
        if not path.is_file():
            raise TemplateNotFoundException(name)
        return path

    def load_fragment_text(self, name: str) -> str:
        path = self.path_for(name)
        logger.debug(f"Loading template {path}")
        return path.read_text(encoding="utf-8")

    def load_document(self, name: str) -> Document:
        return self.parse_document(self.load_fragment_text(name))

    def parse_document(self, markup: str) -> Document:
        return parse_document(markup, self.config)

    def parse_fragment(self, markup: str):
        return parse_fragment(markup, self.config)
