"""
structures/
-----------
In-memory models for the non-graph structures.  Public API:

    from structures import ArrayModel, LinkedList, ListNode
    from structures import BinarySearchTree, TreeNode
    from structures import ValidationError
"""

from structures.errors      import ValidationError, require_int, require_index, require_number
from structures.ids         import next_id
from structures.array       import ArrayModel
from structures.linked_list import LinkedList, ListNode
from structures.tree        import BinarySearchTree, TreeNode

__all__ = [
    "ValidationError", "require_int", "require_index", "require_number",
    "next_id",
    "ArrayModel",
    "LinkedList",      "ListNode",
    "BinarySearchTree", "TreeNode",
]
