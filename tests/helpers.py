import json
from typing import Any, Dict, List, Tuple

import httpx


def galaxy_transport(routes: Dict[str, Any], calls: List[httpx.Request]) -> httpx.MockTransport:
    """
    MockTransport answering GET requests from a path -> payload mapping.

    A payload given as a (status_code, body) tuple is returned with that status.
    Unknown paths answer 404 the way Galaxy does.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        payload = routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"err_msg": "Not found", "err_code": 404001})
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, tuple):
            status, body = payload
            return httpx.Response(status, content=json.dumps(body))
        return httpx.Response(200, json=payload)

    return httpx.MockTransport(handler)


def make_tools(sections: List[Tuple[str, int]]) -> List[Dict[str, Any]]:
    tools = []
    for section, count in sections:
        for i in range(count):
            tools.append({
                "id": f"toolshed.g2.bx.psu.edu/repos/iuc/{section.lower()}_{i}/{section.lower()}_{i}/1.0",
                "name": f"{section} tool {i}",
                "description": f"does {section.lower()} thing {i}",
                "panel_section_name": section,
                "version": "1.0",
            })
    return tools
