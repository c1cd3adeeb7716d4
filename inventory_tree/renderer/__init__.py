"""Rendering subpackage.

Turns a resolved :class:`~inventory_tree.models.NestedInventoryStructure`
into the nested ``<inventorylist>`` markup read by Fantasy Grounds:

* :mod:`inventory_tree.renderer.markup` builds and serializes elements.
* :mod:`inventory_tree.renderer.strategy` holds the pluggable per-node hooks
  and the default Fantasy Grounds strategy.
* :mod:`inventory_tree.renderer.inventory` walks the tree, numbers the nodes
  and stitches the fragments together.
"""
