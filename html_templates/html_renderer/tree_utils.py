"""
Helpers for mutating a live lxml tree while it is being walked.
"""

from copy import deepcopy


def is_element(node):
    """Return True for elements; False for comments, processing instructions and entities."""
    return isinstance(node.tag, str)


def clone_before(node):
    """
    Insert a deep copy of *node* as its previous sibling and return the copy.

    The copy does not take over the text following *node*.
    """
    copy = deepcopy(node)
    copy.tail = None
    node.addprevious(copy)
    return copy


def remove_node(node):
    """
    Detach *node* from its parent, keeping the text that follows it.
    """
    if node.getparent() is not None:
        node.drop_tree()


def unwrap_node(node):
    """
    Move the text and children of *node* in front of it, leaving it empty.

    The emptied node is left in place so the caller can remove it together
    with the other nodes marked for removal.
    """
    parent = node.getparent()
    if parent is None:
        return []

    if node.text:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = (previous.tail or "") + node.text
        else:
            parent.text = (parent.text or "") + node.text
        node.text = None

    children = list(node)
    for child in children:
        node.addprevious(child)
    return children


def set_text(node, value):
    """Replace the whole content of *node* with plain text."""
    for child in list(node):
        node.remove(child)
    node.text = value
