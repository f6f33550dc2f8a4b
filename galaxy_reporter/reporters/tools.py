from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from galaxy_reporter.client import ApiFailure, GalaxyApi
from galaxy_reporter.enumerations import GalaxyEndpoint, NumericLimits
from galaxy_reporter.schemas import Tool

logger = logging.getLogger("galaxy_reporter.reporters.tools")


def parse_tools(data: Iterable[Any]) -> List[Tool]:
    """
    Turn the /api/tools payload into Tool records.

    Panel sections (model_class "ToolSection") are flattened into their
    elements, which inherit the section name when they do not carry one.
    Section labels and entries that are not valid tools are skipped.
    """
    tools: List[Tool] = []
    for entry in data:
        if not isinstance(entry, dict):
            logger.warning(f"Skipping non-object entry in tool list: {entry!r}")
            continue

        model_class = entry.get("model_class")
        if model_class == "ToolSectionLabel":
            continue
        if model_class == "ToolSection" or "elems" in entry:
            section_name = entry.get("name")
            elems = [
                {**elem, "panel_section_name": elem.get("panel_section_name") or section_name}
                for elem in entry.get("elems") or []
                if isinstance(elem, dict)
            ]
            tools.extend(parse_tools(elems))
            continue

        try:
            tools.append(Tool.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping malformed tool entry {entry.get('id')!r}: {e.error_count()} validation error(s)")
    return tools


def group_tools(tools: Iterable[Tool]) -> Dict[str, List[Tool]]:
    """Group tools by panel section, keeping first-seen section order and source tool order."""
    sections: Dict[str, List[Tool]] = {}
    for tool in tools:
        sections.setdefault(tool.section, []).append(tool)
    return sections


def select_detail_tool(tools: Iterable[Tool]) -> Optional[Tool]:
    """Pick the first tool whose id contains a path separator."""
    return next((tool for tool in tools if tool.is_qualified), None)


def format_tool_summary(tools: List[Tool], limit: int = NumericLimits.TOOLS_PER_SECTION) -> List[str]:
    sections = group_tools(tools)
    lines = [f"Found {len(tools)} tools in {len(sections)} sections", ""]

    for section, section_tools in sections.items():
        lines.append(f"## {section} ({len(section_tools)} tools)")
        for tool in section_tools[:limit]:
            lines.append(f"- {tool.name}: {tool.id}")
            lines.append(f"  Description: {tool.description_or_default}")
        if len(section_tools) > limit:
            lines.append(f"  ... and {len(section_tools) - limit} more tools")
        lines.append("")

    return lines


def format_tool_details(tool: Tool) -> List[str]:
    return [
        "Tool Details:",
        f"- Name: {tool.name}",
        f"- Version: {tool.version}",
        f"- Description: {tool.description_or_default}",
    ]


async def show_tool_details(api: GalaxyApi, tool: Tool) -> Optional[Tool]:
    """Fetch and print the detail record of a single tool."""
    print(f"\nFetching details for tool: {tool.name}")
    print(f"Tool ID: {tool.id}")

    result = await api.get(GalaxyEndpoint.TOOL.value, path_params={"tool_id": tool.id})
    if isinstance(result, ApiFailure):
        logger.error(f"Error fetching tool details: {result.error}")
        return None
    if not isinstance(result.data, dict):
        logger.error(f"No details returned for tool {tool.id}")
        return None

    details = Tool.model_validate(result.data)
    print()
    print("\n".join(format_tool_details(details)))
    return details


async def list_tools(api: GalaxyApi) -> Optional[List[Tool]]:
    """
    Print the tool catalog grouped by panel section, then the details of one tool.

    Returns the parsed tool list, or None when the catalog could not be fetched.
    """
    try:
        result = await api.get(GalaxyEndpoint.TOOLS.value)

        if isinstance(result, ApiFailure):
            logger.error(f"Error fetching tools: {result.error}")
            return None

        if not isinstance(result.data, list):
            logger.error("No tools data returned")
            return None

        tools = parse_tools(result.data)
        print()
        print("\n".join(format_tool_summary(tools)))

        detail_tool = select_detail_tool(tools)
        if detail_tool is None:
            logger.info("No tool with a qualified id found, skipping detail lookup")
        else:
            try:
                await show_tool_details(api, detail_tool)
            except Exception as e:
                logger.error(f"Error in show_tool_details: {e}", exc_info=True)

        return tools

    except Exception as e:
        logger.error(f"Error in list_tools: {e}", exc_info=True)
        return None
