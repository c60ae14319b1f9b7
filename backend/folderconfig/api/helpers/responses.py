"""
Shared OpenAPI response definitions for FastAPI route decorators.

Usage:
    from folderconfig.api.helpers.responses import RESP_404

    @router.get("/teams/{team_id}", responses={**RESP_404})
    async def read_team(...): ...
"""

# Atomic response definitions
RESP_400 = {400: {"description": "Invalid request body or unknown team reference"}}
RESP_404 = {404: {"description": "Resource not found"}}
RESP_409 = {409: {"description": "Conflicts with existing data"}}

# Common composites
RESP_400_404 = {**RESP_400, **RESP_404}
RESP_400_409 = {**RESP_400, **RESP_409}
RESP_400_404_409 = {**RESP_400, **RESP_404, **RESP_409}
RESP_404_409 = {**RESP_404, **RESP_409}
