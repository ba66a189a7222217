from qa_suite.api.cleanup import CreatedUsers
from qa_suite.api.context import ApiContext, resolve_api_context
from qa_suite.api.helpers import ApiHelpers

__all__ = ["ApiContext", "ApiHelpers", "CreatedUsers", "resolve_api_context"]
