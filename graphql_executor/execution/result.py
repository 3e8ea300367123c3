# Copyright 2021-present Kensho Technologies, LLC.
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from graphql.error import GraphQLError


ErrorFormatter = Callable[[GraphQLError], Dict[str, Any]]


def format_error(error: GraphQLError) -> Dict[str, Any]:
    """Return the shape in which an error is shown to clients.

    The result always contains the message, and contains the source locations, the response
    path and the extensions whenever the error has any.
    """
    return error.formatted


@dataclass(frozen=True)
class ExecutionResult:
    """The outcome of executing one operation: the produced data, and any errors encountered.

    The data is None if the operation could not be executed at all, or if an error made its
    root null. The errors are in the order in which they were encountered.
    """

    data: Optional[Dict[str, Any]]
    errors: List[GraphQLError] = field(default_factory=list)

    def format(self, error_formatter: ErrorFormatter = format_error) -> Dict[str, Any]:
        """Return the result as a JSON-serializable dict, formatting errors with the formatter.

        The "errors" key is omitted when there were no errors.
        """
        formatted: Dict[str, Any] = {"data": self.data}
        if self.errors:
            formatted["errors"] = [error_formatter(error) for error in self.errors]
        return formatted

    @property
    def formatted(self) -> Dict[str, Any]:
        return self.format()
