# Copyright 2021-present Kensho Technologies, LLC.
"""Execution of a single operation against an executable schema.

Resolvers are called synchronously, and may return either a value or an awaitable of one. The
executor only ever waits where it has to: it starts the resolvers of all sibling fields (or
list items) first, and then waits for those that returned awaitables, all at once. As a result,
executing an operation whose resolvers never return awaitables produces an ExecutionResult
directly, and otherwise produces an awaitable of one.

Errors raised (or returned) by resolvers, and errors found while completing their values, are
recorded in the execution context together with the path of the value they affect. A value
that cannot be produced becomes null. If its position in the response is non-nullable, the
error propagates as an exception up to the nearest nullable position, which becomes null
instead; if there is no such position, the data of the entire response becomes null.
"""
import asyncio
from collections.abc import Iterable, Mapping
import logging
from typing import (
    Any,
    Awaitable,
    Dict,
    Generator,
    List,
    MutableMapping,
    MutableSequence,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
    cast,
)

from graphql.error import GraphQLError, located_error
from graphql.language.ast import DocumentNode, FieldNode, OperationType
from graphql.pyutils import Undefined, is_awaitable

from ..ast_manipulation import get_fragments, get_operation
from ..global_utils import print_safe
from ..schema.definition import (
    AbstractType,
    Field,
    GraphQLType,
    LeafType,
    ListType,
    NonNullType,
    ObjectType,
    Resolver,
    TypeResolver,
    get_named_type,
)
from ..schema.schema import Schema
from .collection import CollectedFields, collect_fields, get_field_def
from .context import ExecutionContext, ResolveInfo
from .response_path import ResponsePath, add_path_key
from .result import ExecutionResult
from .values import get_argument_values


logger = logging.getLogger(__name__)

T = TypeVar("T")

AwaitableOrValue = Union[Awaitable[T], T]


def default_field_resolver(
    parent_value: Any, args: Dict[str, Any], context_value: Any, info: ResolveInfo
) -> Any:
    """Resolve a field by looking up the field's name on the parent value.

    Mappings are looked up by key, and any other value by attribute. If the looked-up member
    is callable, it is called with the field's arguments, the context value and the info,
    and its result is the value of the field.
    """
    field_name = info.field_name
    if isinstance(parent_value, Mapping):
        value = parent_value.get(field_name)
    else:
        value = getattr(parent_value, field_name, None)

    if callable(value):
        return value(args, context_value, info)
    return value


def default_type_resolver(value: Any, context_value: Any, info: ResolveInfo) -> Any:
    """Determine the object type of a value of an abstract type.

    Uses the value's "__typename" key or attribute if it has one, and otherwise the is_type_of
    functions of the possible types of the abstract type, in order.
    """
    if isinstance(value, Mapping):
        type_name = value.get("__typename")
    else:
        type_name = getattr(value, "__typename", None)
    if isinstance(type_name, str):
        return type_name

    abstract_type = cast(AbstractType, get_named_type(info.return_type))
    possible_types = info.schema.get_possible_types(abstract_type)
    awaitable_is_type_of_results: List[Awaitable[bool]] = []
    awaitable_types: List[ObjectType] = []
    for possible_type in possible_types:
        if possible_type.is_type_of is None:
            continue
        is_type_of_result = possible_type.is_type_of(value, context_value, info)
        if is_awaitable(is_type_of_result):
            awaitable_is_type_of_results.append(cast(Awaitable[bool], is_type_of_result))
            awaitable_types.append(possible_type)
        elif is_type_of_result:
            for pending_result in awaitable_is_type_of_results:
                _close_awaitable(pending_result)
            return possible_type

    if awaitable_is_type_of_results:
        return PendingTypeResolution(awaitable_is_type_of_results, awaitable_types)

    return None


class PendingTypeResolution:
    """Awaitable of the first possible type whose awaitable is_type_of check succeeds.

    Closing it closes the is_type_of checks that have not been awaited yet.
    """

    def __init__(
        self, is_type_of_results: List[Awaitable[bool]], possible_types: List[ObjectType]
    ) -> None:
        self.is_type_of_results = is_type_of_results
        self.possible_types = possible_types

    async def _get_type(self) -> Optional[ObjectType]:
        is_type_of_results = await asyncio.gather(*self.is_type_of_results)
        for is_type_of_result, possible_type in zip(is_type_of_results, self.possible_types):
            if is_type_of_result:
                return possible_type
        return None

    def __await__(self) -> Generator[Any, None, Optional[ObjectType]]:
        return self._get_type().__await__()

    def close(self) -> None:
        for is_type_of_result in self.is_type_of_results:
            _close_awaitable(is_type_of_result)


def _close_awaitable(value: Any) -> None:
    """Close the value if it is a coroutine or a pending type resolution that was never awaited."""
    if asyncio.iscoroutine(value) or isinstance(value, PendingTypeResolution):
        value.close()


class _AwaitableInSynchronousExecution(Exception):
    """Raised to stop an execution that must complete synchronously, when it cannot."""


def _raise_first_bubbled_error(
    context: ExecutionContext, completed_values: Sequence[Any]
) -> None:
    """Raise the first error found among completed sibling values, if any.

    Siblings keep executing after one of them fails, so several of them may have failed in a
    way that nulls their shared parent. All of them are recorded here, in field order, and the
    first is propagated. Recording is idempotent, so the position that catches it does not
    record it again.
    """
    bubbled_errors = [value for value in completed_values if isinstance(value, BaseException)]
    if not bubbled_errors:
        return

    for error in bubbled_errors:
        if not isinstance(error, GraphQLError):
            raise error
        context.record_error(error)
    raise bubbled_errors[0]


class Executor:
    """Executes the operation of an ExecutionContext, recording errors into it.

    If require_sync is set, execution stops at the first awaitable returned by a resolver, a
    type resolver or an is_type_of function. That awaitable is closed, and no awaitables of
    the execution are left pending.
    """

    def __init__(self, context: ExecutionContext, require_sync: bool = False) -> None:
        self.context = context
        self.require_sync = require_sync
        self._subfields_cache: Dict[Tuple[str, Tuple[int, ...]], CollectedFields] = {}

    def _ensure_synchronous(self, value: Any) -> None:
        if self.require_sync and is_awaitable(value):
            _close_awaitable(value)
            raise _AwaitableInSynchronousExecution()

    def execute_operation(self) -> AwaitableOrValue[Optional[Dict[str, Any]]]:
        """Execute the operation, returning its data or an awaitable of it.

        Root fields of mutations are executed serially, one after the other. Root fields of
        queries and subscriptions are executed like all other fields.
        """
        context = self.context
        operation = context.operation
        root_type = context.schema.get_root_type(operation.operation)
        if root_type is None:
            raise AssertionError(
                f"Attempted to execute an operation without a root type: {operation.operation}"
            )

        try:
            fields = collect_fields(
                context.schema,
                context.fragments,
                context.variable_values,
                root_type,
                operation.selection_set,
            )
            if operation.operation == OperationType.MUTATION:
                data = self.execute_fields_serially(root_type, context.root_value, None, fields)
            else:
                data = self.execute_fields(root_type, context.root_value, None, fields)
        except GraphQLError as error:
            self._null_root(error)
            return None

        if is_awaitable(data):

            async def await_data() -> Optional[Dict[str, Any]]:
                try:
                    return await cast(Awaitable[Dict[str, Any]], data)
                except GraphQLError as error:
                    self._null_root(error)
                    return None

            return await_data()

        return cast(Dict[str, Any], data)

    def _null_root(self, error: GraphQLError) -> None:
        self.context.record_error(error)
        logger.info(
            "Error propagated to the root of the operation, so the response data is null: "
            "%(message)s at %(path)s",
            {"message": error.message, "path": error.path},
        )

    def execute_fields_serially(
        self,
        parent_type: ObjectType,
        source_value: Any,
        path: Optional[ResponsePath],
        fields: CollectedFields,
    ) -> AwaitableOrValue[Dict[str, Any]]:
        """Execute the fields one at a time, each one completing before the next one starts."""
        results: Dict[str, Any] = {}
        field_items = list(fields.items())
        for index, (response_key, field_nodes) in enumerate(field_items):
            field_path = add_path_key(path, response_key)
            try:
                result = self.execute_field(parent_type, source_value, field_nodes, field_path)
            except GraphQLError as error:
                result = error
            if result is Undefined:
                continue

            if is_awaitable(result):
                return self._execute_remaining_fields_serially(
                    parent_type,
                    source_value,
                    path,
                    results,
                    response_key,
                    result,
                    field_items[index + 1 :],
                )
            results[response_key] = result

        _raise_first_bubbled_error(self.context, list(results.values()))
        return results

    async def _execute_remaining_fields_serially(
        self,
        parent_type: ObjectType,
        source_value: Any,
        path: Optional[ResponsePath],
        results: Dict[str, Any],
        pending_key: str,
        pending_result: Awaitable[Any],
        remaining_field_items: List[Tuple[str, List[FieldNode]]],
    ) -> Dict[str, Any]:
        try:
            results[pending_key] = await pending_result
        except GraphQLError as error:
            results[pending_key] = error

        for response_key, field_nodes in remaining_field_items:
            field_path = add_path_key(path, response_key)
            try:
                result = self.execute_field(parent_type, source_value, field_nodes, field_path)
                if is_awaitable(result):
                    result = await result
            except GraphQLError as error:
                result = error
            if result is Undefined:
                continue
            results[response_key] = result

        _raise_first_bubbled_error(self.context, list(results.values()))
        return results

    def execute_fields(
        self,
        parent_type: ObjectType,
        source_value: Any,
        path: Optional[ResponsePath],
        fields: CollectedFields,
    ) -> AwaitableOrValue[Dict[str, Any]]:
        """Execute the fields concurrently, keeping their order in the result.

        Every field's resolver is started before any of them is waited on.
        """
        results: Dict[str, Any] = {}
        pending_keys: List[str] = []
        for response_key, field_nodes in fields.items():
            field_path = add_path_key(path, response_key)
            try:
                result = self.execute_field(parent_type, source_value, field_nodes, field_path)
            except GraphQLError as error:
                result = error
            if result is Undefined:
                continue

            results[response_key] = result
            if is_awaitable(result):
                pending_keys.append(response_key)

        return self._join_pending(results, pending_keys)

    def _join_pending(
        self,
        results: Union[MutableMapping[Any, Any], MutableSequence[Any]],
        pending_keys: List[Any],
    ) -> AwaitableOrValue[Any]:
        """Wait for the pending results of siblings all at once, then check them for errors."""

        def get_values() -> List[Any]:
            if isinstance(results, dict):
                return list(results.values())
            return list(results)

        if not pending_keys:
            _raise_first_bubbled_error(self.context, get_values())
            return results

        async def gather_pending() -> Any:
            awaited_values = await asyncio.gather(
                *(results[key] for key in pending_keys), return_exceptions=True
            )
            for key, value in zip(pending_keys, awaited_values):
                results[key] = value
            _raise_first_bubbled_error(self.context, get_values())
            return results

        return gather_pending()

    def build_resolve_info(
        self,
        field_def: Field,
        field_nodes: List[FieldNode],
        parent_type: ObjectType,
        path: ResponsePath,
    ) -> ResolveInfo:
        context = self.context
        return ResolveInfo(
            field_name=field_nodes[0].name.value,
            field_nodes=field_nodes,
            return_type=field_def.type,
            parent_type=parent_type,
            path=path,
            schema=context.schema,
            fragments=context.fragments,
            root_value=context.root_value,
            operation=context.operation,
            variable_values=context.variable_values,
            context_value=context.context_value,
        )

    def execute_field(
        self,
        parent_type: ObjectType,
        source_value: Any,
        field_nodes: List[FieldNode],
        path: ResponsePath,
    ) -> AwaitableOrValue[Any]:
        """Resolve the field on the given source value, and complete the resolved value.

        Returns Undefined if the parent type has no such field.
        """
        context = self.context
        field_def = get_field_def(parent_type, field_nodes[0].name.value)
        if field_def is None:
            return Undefined

        return_type = field_def.type
        resolve_fn: Resolver = field_def.resolve or context.field_resolver
        info = self.build_resolve_info(field_def, field_nodes, parent_type, path)

        try:
            args = get_argument_values(
                context.schema, field_def, field_nodes[0], context.variable_values
            )
            result = resolve_fn(source_value, args, context.context_value, info)
            self._ensure_synchronous(result)

            if is_awaitable(result):

                async def await_result() -> Any:
                    try:
                        completed = self.complete_value(
                            return_type, field_nodes, info, path, await result
                        )
                        if is_awaitable(completed):
                            return await completed
                        return completed
                    except Exception as raw_error:
                        return self.handle_field_error(raw_error, field_nodes, path, return_type)

                return await_result()

            completed = self.complete_value(return_type, field_nodes, info, path, result)
            if is_awaitable(completed):

                async def await_completed() -> Any:
                    try:
                        return await completed
                    except Exception as raw_error:
                        return self.handle_field_error(raw_error, field_nodes, path, return_type)

                return await_completed()

            return completed
        except Exception as raw_error:
            return self.handle_field_error(raw_error, field_nodes, path, return_type)

    def handle_field_error(
        self,
        raw_error: Exception,
        field_nodes: List[FieldNode],
        path: ResponsePath,
        return_type: GraphQLType,
    ) -> None:
        """Record the error and null the value, or propagate the error if it may not be null.

        Errors that already carry a path were recorded at a deeper position and are propagated
        unchanged, so each error is only ever recorded once, with its original path.
        """
        if isinstance(raw_error, _AwaitableInSynchronousExecution):
            raise raw_error

        error = located_error(raw_error, field_nodes, path.as_list())

        if isinstance(return_type, NonNullType):
            raise error

        self.context.record_error(error)
        logger.debug(
            "Recorded field error, nulling the value at %(path)s: %(message)s",
            {"path": error.path, "message": error.message},
        )
        return None

    def complete_value(
        self,
        return_type: GraphQLType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        path: ResponsePath,
        result: Any,
    ) -> AwaitableOrValue[Any]:
        """Convert a resolved value into a value of the given type for the response."""
        # A resolver may return an error instead of raising it.
        if isinstance(result, Exception):
            raise result

        if isinstance(return_type, NonNullType):
            completed = self.complete_value(return_type.of_type, field_nodes, info, path, result)
            if is_awaitable(completed):

                async def await_non_null() -> Any:
                    awaited_value = await completed
                    if awaited_value is None:
                        raise self._null_in_non_null_error(info)
                    return awaited_value

                return await_non_null()

            if completed is None:
                raise self._null_in_non_null_error(info)
            return completed

        if result is None or result is Undefined:
            return None

        if isinstance(return_type, ListType):
            return self.complete_list_value(return_type, field_nodes, info, path, result)
        elif isinstance(return_type, LeafType):
            return self.complete_leaf_value(return_type, result)
        elif isinstance(return_type, AbstractType):
            return self.complete_abstract_value(return_type, field_nodes, info, path, result)
        elif isinstance(return_type, ObjectType):
            return self.complete_object_value(return_type, field_nodes, info, path, result)
        else:
            raise AssertionError(
                f"Cannot complete value of unexpected output type: {print_safe(return_type)}."
            )

    @staticmethod
    def _null_in_non_null_error(info: ResolveInfo) -> GraphQLError:
        return GraphQLError(
            f"Cannot return null for non-nullable field {info.parent_type.name}.{info.field_name}."
        )

    def complete_list_value(
        self,
        return_type: ListType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        path: ResponsePath,
        result: Any,
    ) -> AwaitableOrValue[List[Any]]:
        """Complete every item of the list concurrently, keeping the order of the items."""
        if not isinstance(result, Iterable) or isinstance(result, (str, bytes, Mapping)):
            raise GraphQLError(
                f"Expected Iterable, but did not find one for field "
                f'"{info.parent_type.name}.{info.field_name}".'
            )

        # The iterable is fully consumed before any item is completed.
        items: List[Any] = []
        try:
            for item in result:
                items.append(item)
        except Exception:
            for item in items:
                _close_awaitable(item)
            raise

        item_type = return_type.of_type
        completed_items: List[Any] = []
        pending_indices: List[int] = []
        for index, item in enumerate(items):
            item_path = path.add_key(index)
            try:
                completed_item = self.complete_list_item_value(
                    item_type, field_nodes, info, item_path, item
                )
            except GraphQLError as error:
                completed_item = error

            if is_awaitable(completed_item):
                pending_indices.append(index)
            completed_items.append(completed_item)

        return self._join_pending(completed_items, pending_indices)

    def complete_list_item_value(
        self,
        item_type: GraphQLType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        item_path: ResponsePath,
        item: Any,
    ) -> AwaitableOrValue[Any]:
        """Complete one list item, nulling only its own slot if it fails and may be null."""
        try:
            self._ensure_synchronous(item)
            if is_awaitable(item):

                async def await_item() -> Any:
                    try:
                        completed = self.complete_value(
                            item_type, field_nodes, info, item_path, await item
                        )
                        if is_awaitable(completed):
                            return await completed
                        return completed
                    except Exception as raw_error:
                        return self.handle_field_error(
                            raw_error, field_nodes, item_path, item_type
                        )

                return await_item()

            completed_item = self.complete_value(item_type, field_nodes, info, item_path, item)
            if is_awaitable(completed_item):

                async def await_completed_item() -> Any:
                    try:
                        return await completed_item
                    except Exception as raw_error:
                        return self.handle_field_error(
                            raw_error, field_nodes, item_path, item_type
                        )

                return await_completed_item()

            return completed_item
        except Exception as raw_error:
            return self.handle_field_error(raw_error, field_nodes, item_path, item_type)

    def complete_leaf_value(self, return_type: LeafType, result: Any) -> Any:
        """Serialize the value using the leaf type in effect for this schema."""
        leaf_type = self.context.schema.resolve_leaf_type(return_type)
        serialized_result = leaf_type.serialize(result)
        if serialized_result is None or serialized_result is Undefined:
            raise GraphQLError(
                f'Expected a value of type "{leaf_type.name}" but received: {print_safe(result)}'
            )
        return serialized_result

    def complete_abstract_value(
        self,
        return_type: AbstractType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        path: ResponsePath,
        result: Any,
    ) -> AwaitableOrValue[Any]:
        """Determine the object type of the value, then complete the value as that type.

        The type is determined by the abstract type's own resolve_type function if it has one,
        then by the type resolver of the execution, and finally by the default type resolver.
        """
        context = self.context
        resolve_type_fn: TypeResolver = (
            return_type.resolve_type or context.type_resolver or default_type_resolver
        )
        runtime_type = resolve_type_fn(result, context.context_value, info)
        self._ensure_synchronous(runtime_type)

        if is_awaitable(runtime_type):

            async def await_complete_object_value() -> Any:
                object_type = self.ensure_valid_runtime_type(
                    await runtime_type, return_type, field_nodes, info, result
                )
                completed = self.complete_object_value(
                    object_type, field_nodes, info, path, result
                )
                if is_awaitable(completed):
                    return await completed
                return completed

            return await_complete_object_value()

        object_type = self.ensure_valid_runtime_type(
            runtime_type, return_type, field_nodes, info, result
        )
        return self.complete_object_value(object_type, field_nodes, info, path, result)

    def ensure_valid_runtime_type(
        self,
        runtime_type_or_name: Any,
        return_type: AbstractType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        result: Any,
    ) -> ObjectType:
        """Check that the type resolved for the value is a possible type of the abstract type."""
        schema = self.context.schema
        if runtime_type_or_name is None:
            raise GraphQLError(
                f'Abstract type "{return_type.name}" must resolve to an Object type at runtime '
                f'for field "{info.parent_type.name}.{info.field_name}". Either the '
                f'"{return_type.name}" type should provide a "resolve_type" function or each '
                f'possible type should provide an "is_type_of" function.',
                field_nodes,
            )

        if isinstance(runtime_type_or_name, str):
            runtime_type = schema.get_type(runtime_type_or_name)
            if runtime_type is None:
                raise GraphQLError(
                    f'Abstract type "{return_type.name}" was resolved to a type '
                    f'"{runtime_type_or_name}" that does not exist inside the schema.',
                    field_nodes,
                )
        else:
            runtime_type = runtime_type_or_name

        if not isinstance(runtime_type, ObjectType):
            raise GraphQLError(
                f'Abstract type "{return_type.name}" must resolve to an Object type at runtime '
                f'for field "{info.parent_type.name}.{info.field_name}" with value '
                f'{print_safe(result)}, received "{print_safe(runtime_type)}".',
                field_nodes,
            )

        if not schema.is_sub_type(return_type, runtime_type):
            raise GraphQLError(
                f'Runtime Object type "{runtime_type.name}" is not a possible type '
                f'for "{return_type.name}".',
                field_nodes,
            )

        return runtime_type

    def complete_object_value(
        self,
        return_type: ObjectType,
        field_nodes: List[FieldNode],
        info: ResolveInfo,
        path: ResponsePath,
        result: Any,
    ) -> AwaitableOrValue[Dict[str, Any]]:
        """Execute the selections made on the object, after checking the value's type if able."""
        if return_type.is_type_of is not None:
            is_type_of = return_type.is_type_of(result, self.context.context_value, info)
            self._ensure_synchronous(is_type_of)

            if is_awaitable(is_type_of):

                async def execute_subfields_async() -> Dict[str, Any]:
                    if not await is_type_of:
                        raise self._invalid_return_type_error(return_type, result, field_nodes)
                    completed = self.collect_and_execute_subfields(
                        return_type, field_nodes, path, result
                    )
                    if is_awaitable(completed):
                        return await completed
                    return completed

                return execute_subfields_async()

            if not is_type_of:
                raise self._invalid_return_type_error(return_type, result, field_nodes)

        return self.collect_and_execute_subfields(return_type, field_nodes, path, result)

    @staticmethod
    def _invalid_return_type_error(
        return_type: ObjectType, result: Any, field_nodes: List[FieldNode]
    ) -> GraphQLError:
        return GraphQLError(
            f'Expected value of type "{return_type.name}" but got: {print_safe(result)}.',
            field_nodes,
        )

    def collect_subfields(
        self, return_type: ObjectType, field_nodes: List[FieldNode]
    ) -> CollectedFields:
        """Collect the fields selected on the object by all the nodes requesting it.

        The result only depends on the type and the nodes, so it is computed once per pair,
        regardless of how many values of the type are completed.
        """
        cache_key = (return_type.name, tuple(id(field_node) for field_node in field_nodes))
        sub_field_nodes = self._subfields_cache.get(cache_key)
        if sub_field_nodes is None:
            context = self.context
            sub_field_nodes = {}
            visited_fragment_names: set = set()
            for field_node in field_nodes:
                if field_node.selection_set:
                    collect_fields(
                        context.schema,
                        context.fragments,
                        context.variable_values,
                        return_type,
                        field_node.selection_set,
                        sub_field_nodes,
                        visited_fragment_names,
                    )
            self._subfields_cache[cache_key] = sub_field_nodes
        return sub_field_nodes

    def collect_and_execute_subfields(
        self,
        return_type: ObjectType,
        field_nodes: List[FieldNode],
        path: ResponsePath,
        result: Any,
    ) -> AwaitableOrValue[Dict[str, Any]]:
        sub_field_nodes = self.collect_subfields(return_type, field_nodes)
        return self.execute_fields(return_type, result, path, sub_field_nodes)


def build_execution_context(
    schema: Schema,
    document: DocumentNode,
    root_value: Any = None,
    context_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
) -> Union[ExecutionContext, List[GraphQLError]]:
    """Build the context for executing the document, or return the errors that prevent it."""
    try:
        operation = get_operation(document, operation_name)
    except GraphQLError as error:
        return [error]

    if schema.get_root_type(operation.operation) is None:
        return [
            GraphQLError(
                f"Schema is not configured to execute {operation.operation.value} operation.",
                operation,
            )
        ]

    return ExecutionContext(
        schema=schema,
        fragments=get_fragments(document),
        operation=operation,
        root_value=root_value,
        context_value=context_value,
        variable_values=dict(variable_values) if variable_values is not None else {},
        field_resolver=field_resolver if field_resolver is not None else default_field_resolver,
        type_resolver=type_resolver,
    )


def _build_response(
    context: ExecutionContext, data: Optional[Dict[str, Any]]
) -> ExecutionResult:
    if context.errors:
        logger.debug(
            "Executed operation with %(error_count)d errors.",
            {"error_count": len(context.errors)},
        )
    return ExecutionResult(data=data, errors=list(context.errors))


def execute(
    schema: Schema,
    document: DocumentNode,
    root_value: Any = None,
    context_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
) -> AwaitableOrValue[ExecutionResult]:
    """Execute an operation of the document against the schema.

    Args:
        schema: the schema to execute against; validated on first use
        document: parsed and validated GraphQL document
        root_value: the parent value of the root fields of the operation
        context_value: opaque value passed to every resolver, e.g. for per-request state
        variable_values: dict, variable name -> value, already coerced to internal values
        operation_name: name of the operation to execute; may be omitted if the document
                        contains exactly one operation
        field_resolver: resolver used for fields that do not declare their own
        type_resolver: type resolver used for abstract types that do not declare their own

    Returns:
        ExecutionResult if every resolver returned its value directly, otherwise an awaitable
        that produces the ExecutionResult. Errors in the request itself (such as an unknown
        operation name) are reported in the result's errors, with null data.
    """
    return _execute(
        schema,
        document,
        root_value=root_value,
        context_value=context_value,
        variable_values=variable_values,
        operation_name=operation_name,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )


def _execute(
    schema: Schema,
    document: DocumentNode,
    root_value: Any = None,
    context_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
    require_sync: bool = False,
) -> AwaitableOrValue[ExecutionResult]:
    schema.assert_valid()

    context_or_errors = build_execution_context(
        schema,
        document,
        root_value=root_value,
        context_value=context_value,
        variable_values=variable_values,
        operation_name=operation_name,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )
    if isinstance(context_or_errors, list):
        return ExecutionResult(data=None, errors=context_or_errors)

    context = context_or_errors
    data = Executor(context, require_sync=require_sync).execute_operation()
    if is_awaitable(data):

        async def await_response() -> ExecutionResult:
            return _build_response(context, await data)

        return await_response()

    return _build_response(context, cast(Optional[Dict[str, Any]], data))


async def execute_async(
    schema: Schema,
    document: DocumentNode,
    root_value: Any = None,
    context_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
) -> ExecutionResult:
    """Execute the operation like execute() does, always as a coroutine."""
    result = execute(
        schema,
        document,
        root_value=root_value,
        context_value=context_value,
        variable_values=variable_values,
        operation_name=operation_name,
        field_resolver=field_resolver,
        type_resolver=type_resolver,
    )
    if is_awaitable(result):
        return await cast(Awaitable[ExecutionResult], result)
    return cast(ExecutionResult, result)


def execute_sync(
    schema: Schema,
    document: DocumentNode,
    root_value: Any = None,
    context_value: Any = None,
    variable_values: Optional[Dict[str, Any]] = None,
    operation_name: Optional[str] = None,
    field_resolver: Optional[Resolver] = None,
    type_resolver: Optional[TypeResolver] = None,
) -> ExecutionResult:
    """Execute the operation like execute() does, requiring it to complete synchronously.

    Raises RuntimeError if a resolver, a type resolver or an is_type_of function returned an
    awaitable. Execution stops there, and that awaitable is closed without being awaited.
    """
    try:
        result = _execute(
            schema,
            document,
            root_value=root_value,
            context_value=context_value,
            variable_values=variable_values,
            operation_name=operation_name,
            field_resolver=field_resolver,
            type_resolver=type_resolver,
            require_sync=True,
        )
    except _AwaitableInSynchronousExecution as e:
        raise RuntimeError("GraphQL execution failed to complete synchronously.") from e
    return cast(ExecutionResult, result)
