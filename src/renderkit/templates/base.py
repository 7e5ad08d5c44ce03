"""
Jinja2-backed template renderers.

A template set holds a root template plus any named templates pulled in
from a Loader. Sources are kept in a dict served to Jinja2 through a
DictLoader, so templates can include and extend each other by name.

Each render works on a clone of the set: concurrent renders never share
an Environment, and helper functions or delimiters changed after a render
started do not affect it.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping
from typing import Any, BinaryIO

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from renderkit.context import Context, check_context
from renderkit.errors import RenderFailedError, TemplateLoadError, TemplateNotFoundError
from renderkit.options import Option, new_options
from renderkit.renderer import Renderer, Sink, mime_text_plain
from renderkit.renderers.encoding import utf8
from renderkit.templates.funcs import DEFAULT_FUNCS
from renderkit.templates.loaders import Loader

logger = logging.getLogger(__name__)

TemplateOption = Callable[["BaseTemplate"], None]


def template_context(data: Any) -> dict[str, Any]:
    """Build the variables a template sees for data.

    The value itself is always available as ``data``. When data is a
    mapping with string keys, those keys are exposed directly as well.
    """
    context: dict[str, Any] = {}
    if isinstance(data, Mapping):
        context.update((k, v) for k, v in data.items() if isinstance(k, str))
    context["data"] = data
    return context


class BaseTemplate(Renderer):
    """Template set rendered through Jinja2.

    Subclasses choose the escaping mode and the default content type.
    """

    autoescape: bool = False
    default_mime: Callable[[], Option] = staticmethod(mime_text_plain)

    def __init__(self, name: str, *opts: TemplateOption):
        """Create an empty template set and apply template options.

        Args:
            name: Name of the root template; used when no name option is given
            *opts: Template options such as load(), set_funcs() or set_delims()

        Raises:
            TemplateLoadError: If an option fails to load or parse templates
        """
        self.name = name
        self.loader: Loader | None = None
        self.funcs: dict[str, Callable[..., Any]] = dict(DEFAULT_FUNCS)
        self._delims: dict[str, str] = {}
        self._sources: dict[str, str] = {}
        self.env = self._new_environment()

        for opt in opts:
            opt(self)

    def _new_environment(self) -> Environment:
        env = Environment(
            loader=DictLoader(self._sources),
            autoescape=self.autoescape,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            **self._delims,
        )
        env.globals.update(self.funcs)
        return env

    def add_template(self, name: str, source: str) -> BaseTemplate:
        """Parse source and register it under name.

        Raises:
            TemplateLoadError: If source is not valid template syntax
        """
        try:
            self.env.compile(source, name=name)
        except TemplateSyntaxError as e:
            raise TemplateLoadError(f"failed to parse template ({e.message}, line {e.lineno})", name) from e
        self._sources[name] = source
        return self

    def parse(self, source: str) -> BaseTemplate:
        """Set the body of the root template."""
        return self.add_template(self.name, source)

    def lookup(self, name: str) -> Template | None:
        """Return the compiled template called name, or None."""
        if name not in self._sources:
            return None
        return self.env.get_template(name)

    def template_names(self) -> list[str]:
        """Names of every template in the set, in registration order."""
        return list(self._sources)

    def set_funcs(self, funcs: Mapping[str, Callable[..., Any]]) -> None:
        """Add or override helper functions."""
        self.funcs.update(funcs)
        self.env.globals.update(funcs)

    def set_delims(self, left: str, right: str) -> None:
        """Change the expression delimiters, e.g. ``[[`` and ``]]``."""
        self._delims = {"variable_start_string": left, "variable_end_string": right}
        self.env = self._new_environment()

    def clone(self) -> BaseTemplate:
        """Return an independent copy of the template set."""
        tpl = copy.copy(self)
        tpl.funcs = dict(self.funcs)
        tpl._delims = dict(self._delims)
        tpl._sources = dict(self._sources)
        tpl.env = tpl._new_environment()
        return tpl

    def render_context(
        self,
        ctx: Context,
        sink: Sink | BinaryIO,
        data: Any,
        *opts: Option,
    ) -> None:
        """Execute a template from the set against data.

        The template executed is the one named by the name() option, or the
        root template otherwise. Output is streamed to the sink as it is
        produced, checking ctx between chunks.

        Raises:
            TemplateNotFoundError: If the selected template is not in the set
            RenderFailedError: If template execution fails
        """
        check_context(ctx)
        options = new_options().use(self.default_mime()).use(*opts)

        tpl = self.clone()
        target = options.name or self.name
        if target not in tpl._sources:
            raise TemplateNotFoundError(target)

        template = tpl.env.get_template(target)
        chunks = template.generate(template_context(data))
        while True:
            try:
                chunk = next(chunks)
            except StopIteration:
                break
            except TemplateNotFound as e:
                raise TemplateNotFoundError(e.name or target) from e
            except (TemplateError, ArithmeticError, LookupError, TypeError, ValueError, AttributeError) as e:
                raise RenderFailedError(f"template execute {target}: {e}") from e
            check_context(ctx)
            sink.write(utf8(chunk, f"template execute {target}"))


def load(loader: Loader) -> TemplateOption:
    """Load every template the loader lists into the set.

    Templates are registered under their loader names, so they can be
    selected with the name() option or included from other templates.

    Raises:
        TemplateLoadError: If listing, reading or parsing any template fails
    """

    def apply(t: BaseTemplate) -> None:
        t.loader = loader
        try:
            names = loader.load("")
        except Exception as e:
            raise TemplateLoadError(f"failed to list templates ({e})") from e

        for name in names:
            try:
                content = loader.read(name).decode("utf-8")
            except Exception as e:
                raise TemplateLoadError(f"failed to read template ({e})", name) from e
            t.add_template(name, content)

        logger.debug(f"Loaded {len(names)} template(s) into {t.name!r}")

    return apply


def set_funcs(funcs: Mapping[str, Callable[..., Any]]) -> TemplateOption:
    """Add or override template helper functions."""

    def apply(t: BaseTemplate) -> None:
        t.set_funcs(funcs)

    return apply


def set_delims(left: str, right: str) -> TemplateOption:
    """Use custom expression delimiters.

    Apply before load() or parse() so templates are validated with the
    delimiters they are written in.
    """

    def apply(t: BaseTemplate) -> None:
        t.set_delims(left, right)

    return apply
