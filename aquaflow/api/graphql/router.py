from fastapi import Depends
from strawberry.fastapi import GraphQLRouter

from aquaflow.api.graphql.schema import schema
from aquaflow.core.context import RequestContext, get_request_context


async def get_context(ctx: RequestContext = Depends(get_request_context)):
    return {"request_context": ctx}


graphql_router = GraphQLRouter(schema, context_getter=get_context)
