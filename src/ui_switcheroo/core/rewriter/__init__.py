"""
Rewriter Package.

This package provides the `ElementRewriter` class, composed of mixins that
handle specific aspects of the element migration:
- Attributes: prop rules and default attributes.
- Styles: utility classes to style-attribute entries.
- Structure: graft / wrap / lift edits in the second pass.
"""

from ui_switcheroo.core.rewriter.attributes import AttributeMixin
from ui_switcheroo.core.rewriter.base import BaseElementRewriter, NodeRecord, RewriteSummary
from ui_switcheroo.core.rewriter.structure import StructureMixin
from ui_switcheroo.core.rewriter.styles import StyleMixin


class ElementRewriter(StructureMixin, StyleMixin, AttributeMixin, BaseElementRewriter):
  """
  The main tree rewriter of ui-switcheroo.

  Inherits traversal and state management from `BaseElementRewriter` and the
  per-concern edits from the mixins. This class is the entry point used by
  the `MigrationEngine`.
  """


__all__ = ["ElementRewriter", "NodeRecord", "RewriteSummary"]
