from typing import Optional
from promotion.narration.schemas.narration_schema import SegmentNarrationContext, WrestlerContext

DESCRIPTION_LIMIT = 200


def truncate_description(description: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    """Cut a description at the last word boundary within ``limit`` characters."""
    if not description:
        return ""
    if len(description) <= limit:
        return description
    cut = description.rfind(" ", 0, limit + 1)
    if cut <= 0:
        return description[:limit] + "..."
    return description[:cut] + "..."


class PromptGenerator:
    """Turns a segment context into the text sent to the narration model."""

    @staticmethod
    def _participant(wrestler: WrestlerContext) -> str:
        if wrestler.manager_name:
            return f"{wrestler.name} accompanied to the ring by {wrestler.manager_name}"
        return wrestler.name

    def generate_prompt(self, context: SegmentNarrationContext) -> str:
        parts = [
            "Narrate the following wrestling segment based on the provided JSON context.\n\n",
            "CRITICAL INSTRUCTIONS:\n",
            "1. PARTICIPANTS: The following wrestlers are participating in this match and MUST ALL "
            "be mentioned and involved in the action: ",
            ", ".join(self._participant(w) for w in context.wrestlers),
            ".\n",
            f"2. OUTCOME: The match MUST end with the following outcome: {context.determined_outcome}\n",
            f"3. MATCH TYPE: This is a '{context.segment_type.segment_type}'.\n",
        ]
        if context.segment_type.stipulation:
            parts.append(f"   Stipulation: {context.segment_type.stipulation}.\n")
        if context.segment_type.rules:
            parts.append(f"   Rules: {', '.join(context.segment_type.rules)}.\n")
        parts += [
            "Generate a compelling wrestling narration as a DIALOGUE between the commentators "
            "provided in the JSON.\n",
            "Each line of dialogue MUST start with a tag identifying the speaker in the following "
            "format: '[SPEAKER:Commentator Name]'.\n",
            "Follow the tag immediately with a colon and the commentator's dialogue.\n",
            "DO NOT include any text that is not part of a tagged dialogue line.\n\n",
            "Here is the full context for the segment:\n",
            context.model_dump_json(indent=2, exclude_none=True),
        ]
        return "".join(parts)

    def generate_simplified_prompt(self, context: SegmentNarrationContext) -> str:
        lines = ["Narrate a wrestling match based on these details:\n\n", "PARTICIPANTS:\n"]
        for wrestler in context.wrestlers:
            line = f"- {wrestler.name}"
            if wrestler.manager_name:
                line += f" (with {wrestler.manager_name})"
            if wrestler.description:
                line += f": {truncate_description(wrestler.description)}"
            lines.append(line + "\n")
        lines.append("\n")

        if context.referee:
            lines.append(f"REFEREE: {context.referee.name}\n")
        if context.npcs:
            lines.append("OTHER CHARACTERS:\n")
            lines += [f"- {npc.name} ({npc.role})\n" for npc in context.npcs]
            lines.append("\n")

        lines.append(f"MATCH TYPE: {context.segment_type.segment_type}\n")
        if context.segment_type.rules:
            lines.append(f"RULES: {', '.join(context.segment_type.rules)}\n")
        lines.append("\n")

        if context.titles:
            lines.append(f"TITLES ON THE LINE: {', '.join(t.name for t in context.titles)}\n\n")

        lines.append(f"OUTCOME (MUST FOLLOW): {context.determined_outcome}\n")
        lines.append(
            "\nINSTRUCTIONS: Write a commentary for this match as a dialogue between the commentators. "
            "Each line MUST start with '[SPEAKER:Commentator Name]:'. Include all participants. "
            "Mention the referee and commentators. Follow the outcome exactly."
        )
        return "".join(lines)

    def generate_summary_prompt(self, narration: str) -> str:
        return (
            "Summarize the following wrestling narration in 2-3 sentences, focusing on the key "
            "moments and the outcome:\n\n" + narration
        )
