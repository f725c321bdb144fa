"""Dispatch of the solver actions posted by the browser client"""

import logging
from typing import Any, Dict, Mapping

from .session import SolverSession
from .utils.solution_format import SolveRequest

logger = logging.getLogger(__name__)

LOCAL_HOST = "local host"


def handle_action(session: SolverSession, params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Answer one `/solver/` request.

    Args:
        session: Session that runs the solver
        params: Decoded form fields; `action` selects what to do

    Returns:
        JSON-serializable response dictionary
    """
    action = params.get("action")
    if action == "logon":
        # Local servers need no authentication
        return {"token": LOCAL_HOST, "server": LOCAL_HOST, "solver": session.solver_id or ""}
    if action == "solve":
        request = SolveRequest.from_form(params)
        return session.solve(request).to_dict()
    msg = f'Invalid action: "{action}"'
    logger.warning(msg)
    return {"error": msg}
