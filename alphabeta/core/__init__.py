"""Core search components: nodes, evaluator, move ordering, search and executor."""

from .node import ChessNode, GameTreeNode, MoveType, NodeType
from .evaluator import Evaluator, KING_CAPTURED_SCORE
from .ordering import order
from .search import AlphaBetaSearch, MinimaxSearch, SearchResult, SearchTask
from .executor import TimedOut, run_with_deadline
