# Copyright 2021-present Kensho Technologies, LLC.
"""Execution of parsed GraphQL documents against executable schemas."""
from .collection import collect_fields, does_fragment_condition_match, should_include_node  # noqa
from .context import ExecutionContext, ResolveInfo  # noqa
from .executor import (  # noqa
    Executor,
    build_execution_context,
    default_field_resolver,
    default_type_resolver,
    execute,
    execute_async,
    execute_sync,
)
from .response_path import ResponsePath  # noqa
from .result import ExecutionResult, format_error  # noqa
from .values import (  # noqa
    coerce_input_value,
    coerce_variable_values,
    get_argument_values,
    type_from_ast,
    value_from_ast,
)
