"""
feedgen extension carrying additional elements.

feedgen renders the standard Atom fields; this extension hooks the element
renderer into its Atom output. The feed-level extension declares the
vendor namespaces on ``<feed>`` and renders feed extension elements; the
entry-level extension sets entry attributes and renders entry extension
elements.
"""

from typing import Dict, Tuple

from feedgen.ext.base import BaseEntryExtension, BaseExtension

from ..models.atom import ATOM_NAMESPACE
from ..models.elements import AdditionalElement
from ..models.namespace import Attribute
from .element_renderer import render_elements, set_attributes

EXTENSION_NAME = "additional"


class AdditionalElementsExtension(BaseExtension):

    def __init__(self):
        self.elements: Tuple[AdditionalElement, ...] = ()
        self.namespaces: Dict[str, str] = {}

    def extend_ns(self):
        return dict(self.namespaces)

    def extend_atom(self, atom_feed):
        render_elements(atom_feed, self.elements)
        return atom_feed


class AdditionalElementsEntryExtension(BaseEntryExtension):

    def __init__(self):
        self.attributes: Tuple[Attribute, ...] = ()
        self.elements: Tuple[AdditionalElement, ...] = ()

    def extend_atom(self, entry):
        set_attributes(entry, self.attributes)
        # The entry is rendered detached; it lands in the Atom default namespace
        render_elements(entry, self.elements, default_namespace=ATOM_NAMESPACE)
        return entry
