"""A small SVG-equivalent scene graph.

Elements carry attributes, inline style, text, children, pointer listeners
and the transitions last scheduled on them. to_svg() serializes the final
(post-transition) state.
"""

from __future__ import annotations

from html import escape
from typing import Callable, Dict, List, Optional

from .transitions import Transition

# attribute names written with a dash in SVG
_ATTR_NAMES = {"class_": "class", "text_anchor": "text-anchor", "font_size": "font-size"}


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:.2f}".rstrip("0").rstrip(".") if value != int(value) else str(int(value))
    return str(value)


class Element:
    def __init__(self, tag: str, **attrs):
        self.tag = tag
        self.attrs: Dict[str, object] = {}
        self.style: Dict[str, object] = {}
        self.text: Optional[str] = None
        self.html: Optional[str] = None
        self.children: List[Element] = []
        self.parent: Optional[Element] = None
        self.listeners: Dict[str, Callable] = {}
        self.transitions: Dict[str, Transition] = {}
        self.attr(**attrs)

    def __repr__(self):
        ident = self.attrs.get("id") or self.attrs.get("class") or ""
        return f"<Element {self.tag} {ident}>".replace(" >", ">")

    def attr(self, **attrs) -> "Element":
        for k, v in attrs.items():
            self.attrs[_ATTR_NAMES.get(k, k)] = v
        return self

    def css(self, **style) -> "Element":
        for k, v in style.items():
            self.style[k.replace("_", "-")] = v
        return self

    def append(self, tag_or_el, **attrs) -> "Element":
        el = tag_or_el if isinstance(tag_or_el, Element) else Element(tag_or_el, **attrs)
        el.parent = self
        self.children.append(el)
        return el

    def remove(self):
        if self.parent is not None:
            self.parent.children.remove(self)
            self.parent = None

    def classes(self) -> List[str]:
        return str(self.attrs.get("class", "")).split()

    def iter(self):
        yield self
        for c in self.children:
            yield from c.iter()

    def select_all(self, tag: str = None, class_: str = None) -> List["Element"]:
        return [
            el for el in self.iter()
            if el is not self
            and (tag is None or el.tag == tag)
            and (class_ is None or class_ in el.classes())
        ]

    def find_id(self, element_id: str) -> Optional["Element"]:
        for el in self.iter():
            if el.attrs.get("id") == element_id:
                return el
        return None

    def on(self, event: str, handler: Callable) -> "Element":
        self.listeners[event] = handler
        return self

    def dispatch(self, event: str, *args):
        handler = self.listeners.get(event)
        if handler is not None:
            handler(*args)

    def transition(self, transition: Transition) -> "Element":
        """Record a transition; one with the same name replaces the previous one."""
        self.transitions[transition.name] = transition
        return self

    def to_svg(self, indent: int = 0) -> str:
        pad = "  " * indent
        attrs = "".join(f' {k}="{escape(_fmt(v))}"' for k, v in self.attrs.items() if v is not None)
        if self.style:
            style = ";".join(f"{k}:{_fmt(v)}" for k, v in self.style.items())
            attrs += f' style="{escape(style)}"'
        if self.html is not None:
            return f"{pad}<{self.tag}{attrs}>{self.html}</{self.tag}>"
        if not self.children and self.text is None:
            return f"{pad}<{self.tag}{attrs} />"
        if not self.children:
            return f"{pad}<{self.tag}{attrs}>{escape(self.text)}</{self.tag}>"
        inner = "\n".join(c.to_svg(indent + 1) for c in self.children)
        text = escape(self.text) if self.text else ""
        return f"{pad}<{self.tag}{attrs}>{text}\n{inner}\n{pad}</{self.tag}>"


class Document:
    """Page-level holder for container elements looked up by '#id'."""

    def __init__(self, *ids: str):
        self.body = Element("body")
        for element_id in ids:
            self.body.append("div", id=element_id.lstrip("#"))

    def select(self, selector: str) -> Optional[Element]:
        if not selector or not selector.startswith("#"):
            return None
        return self.body.find_id(selector[1:])

    def add(self, selector: str, tag: str = "div") -> Element:
        return self.body.append(tag, id=selector.lstrip("#"))
