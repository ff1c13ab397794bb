"""
Orders Handler - Lambda function for the storefront API.

This module implements the request router: it maps the action named in the
query string (reads) or request body (writes) to a logic layer operation and
wraps every outcome in a JSON envelope. No error escapes as an HTTP failure;
faults are rendered as ``{"status": "error", "message": ...}`` with status 200.
"""

import functools
import json
from typing import Any, Callable, Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qs

from aws_lambda_powertools.event_handler import Response, content_types
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.data_classes.common import BaseProxyEvent
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from storefront.dal import TableStore, get_dal_handler
from storefront.handlers.models.env_vars import StorefrontEnvVars, get_handler_env_vars
from storefront.handlers.utils.errors import (
    InvalidActionError,
    InvalidRequestError,
    ServiceError,
    StoreUnavailableError,
    format_error_response,
    log_error_metrics,
)
from storefront.handlers.utils.observability import count, logger, metrics, tracer
from storefront.handlers.utils.rest_api_resolver import API_PATH, HEALTH_PATH, app
from storefront.logic.order_service import OrderService
from storefront.logic.product_service import ProductService
from storefront.models.input import CreateOrderCommand, DeleteOrderCommand, UpdateOrderCommand
from storefront.models.output import CreateOrderResponse, HealthCheckResponse, PingResponse, SuccessResponse

# Built on first use and reused while the container stays warm
table_store: Optional[TableStore] = None


def get_environment() -> StorefrontEnvVars:
    try:
        return get_handler_env_vars()
    except ValidationError as e:
        raise StoreUnavailableError(
            message=f'Invalid configuration: {e.errors()[0]["msg"]}',
            store_name='config',
        ) from e


def get_table_store() -> TableStore:
    """Return the process-wide table store, creating it from configuration if needed."""
    global table_store

    if table_store is None:
        env = get_environment()
        table_store = get_dal_handler(env)
        logger.info('Table store initialized', extra={'backend': env.TABLE_STORE_BACKEND})
    return table_store


def get_services() -> Tuple[ProductService, OrderService]:
    env = get_environment()
    store = get_table_store()
    return ProductService(store, env.PRODUCTS_TABLE_NAME), OrderService(store, env.ORDERS_TABLE_NAME)


def normalize_action(action: Any) -> str:
    """Trim and lowercase an action name; missing actions become ''."""
    return str(action or '').strip().lower()


def handle_service_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator rendering any failure as the error envelope."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ServiceError as e:
            log_error_metrics(e)
            return format_error_response(e)
        except ValidationError as e:
            logger.error('Request validation failed', extra={
                'validation_errors': str(e),
                'error_count': e.error_count(),
            })
            count('ValidationError')
            return format_error_response(e)
        except Exception as e:
            logger.exception('Unexpected error in handler', extra={
                'error': str(e),
                'function_name': func.__name__,
            })
            count('UnexpectedError')
            return format_error_response(e)

    return wrapper


@handle_service_errors
def handle_read(action: Any, params: Mapping[str, Any]) -> Any:
    """
    Dispatch a read action.

    Args:
        action: Raw action name from the query string
        params: All query string parameters

    Returns:
        A list of products or orders, or an envelope
    """
    action = normalize_action(action)
    tracer.put_annotation('action', action or 'none')

    if action == 'products':
        product_service, _ = get_services()
        return [product.model_dump(by_alias=True) for product in product_service.list_products()]
    if action == 'getallorders':
        _, order_service = get_services()
        return order_service.list_all_orders()
    if action == 'getorders' and params.get('phone'):
        _, order_service = get_services()
        return order_service.list_orders_by_phone(params['phone'])
    if action == 'ping':
        return PingResponse().to_body()

    raise InvalidActionError()


@handle_service_errors
def handle_write(action: Any, body: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Dispatch a write action; anything but update or delete places an order.

    Args:
        action: Raw action name from the request body
        body: All request fields

    Returns:
        Success or error envelope
    """
    action = normalize_action(action)
    tracer.put_annotation('action', action or 'create')

    if action == 'update':
        command = UpdateOrderCommand.model_validate(body)
        _, order_service = get_services()
        order_service.update_order(command)
        return SuccessResponse(message='Order updated').to_body()

    if action == 'delete':
        command = DeleteOrderCommand.model_validate(body)
        _, order_service = get_services()
        order_service.delete_order(command.order_id)
        return SuccessResponse(message='Order deleted').to_body()

    command = CreateOrderCommand.model_validate(body)
    _, order_service = get_services()
    order_id = order_service.create_order(command)
    return CreateOrderResponse(order_id=order_id).to_body()


def parse_request_fields(event: BaseProxyEvent) -> Dict[str, Any]:
    """
    Collect the fields of a write request.

    Query string parameters are merged under the body fields. Form-encoded
    bodies keep the first value of repeated fields; JSON bodies are accepted
    when the content type says so.

    Raises:
        InvalidRequestError: If a JSON body is malformed or not an object
    """
    fields: Dict[str, Any] = dict(event.query_string_parameters or {})
    raw_body = event.decoded_body or ''
    headers = {key.lower(): value for key, value in (event.headers or {}).items()}

    if 'json' in headers.get('content-type', ''):
        try:
            parsed = json.loads(raw_body or '{}')
        except json.JSONDecodeError as e:
            raise InvalidRequestError(f'Invalid JSON in request body: {e.msg}') from e
        if not isinstance(parsed, dict):
            raise InvalidRequestError('Request body must be a JSON object')
        fields.update(parsed)
    else:
        fields.update({key: values[0] for key, values in parse_qs(raw_body, keep_blank_values=True).items()})
    return fields


def json_response(payload: Any, status_code: int = 200) -> Response:
    return Response(
        status_code=status_code,
        content_type=content_types.APPLICATION_JSON,
        body=json.dumps(payload, default=str),
    )


@app.get(API_PATH)
@tracer.capture_method
def read_route() -> Response:
    """Reads: ?action=products|getAllOrders|getOrders&phone=...|ping"""
    params = app.current_event.query_string_parameters or {}
    logger.info('Read request received', extra={'action': params.get('action')})
    return json_response(handle_read(params.get('action'), params))


@app.post(API_PATH)
@tracer.capture_method
def write_route() -> Response:
    """Writes: create by default, action=update or action=delete otherwise."""
    try:
        fields = parse_request_fields(app.current_event)
    except InvalidRequestError as e:
        log_error_metrics(e)
        return json_response(format_error_response(e))

    logger.info('Write request received', extra={
        'action': fields.get('action'),
        'order_id': fields.get('orderId'),
    })
    return json_response(handle_write(fields.get('action'), fields))


@app.get(HEALTH_PATH)
@tracer.capture_method
def health_route() -> Response:
    """Report table store connectivity."""
    env_version, env_name = 'unknown', 'unknown'
    try:
        env = get_environment()
        env_version, env_name = env.APP_VERSION, env.ENVIRONMENT
        store_health = get_table_store().health_check()
    except ServiceError as e:
        log_error_metrics(e)
        store_health = {'status': 'unhealthy', 'error': e.message}

    healthy = store_health.get('status') == 'healthy'
    count('HealthCheckSuccess' if healthy else 'HealthCheckFailure')
    response = HealthCheckResponse(
        status='healthy' if healthy else 'unhealthy',
        version=env_version,
        environment=env_name,
        checks={'store': store_health},
    )
    return json_response(response.to_body(), status_code=200 if healthy else 503)


@tracer.capture_lambda_handler
@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@metrics.log_metrics(capture_cold_start_metric=True)
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Main Lambda handler function.

    Args:
        event: API Gateway REST proxy event
        context: Lambda context object

    Returns:
        API Gateway proxy response
    """
    count('RequestCount')
    try:
        return app.resolve(event, context)
    except Exception as e:
        logger.exception('Unhandled error in lambda handler', extra={'error': str(e)})
        count('RequestError')
        return {
            'statusCode': 200,
            'headers': {'Content-Type': content_types.APPLICATION_JSON},
            'body': json.dumps(format_error_response(e)),
        }
