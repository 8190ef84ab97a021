"""
Idea assistant - suggestions, mood and board summaries on top of a text provider.
Provider failures degrade to deterministic templated output, never to an error.
"""

import re
from collections import Counter
from datetime import datetime
from typing import List, Sequence

from util.logging import logger, sanitize_payload

from .providers import ITextGenerationProvider, TextProviderError
from ..core.schema import CardRecord
from ..vector.labels import capitalize_first, extract_keywords

VALID_MOODS = ['positive', 'negative', 'neutral', 'excited', 'thoughtful']
DEFAULT_MOOD = 'neutral'

MOOD_EMOJI = {
    'positive': '😊',
    'negative': '😟',
    'neutral': '😐',
    'excited': '🎉',
    'thoughtful': '🤔'
}

SUGGESTION_COUNT = 3
SUMMARY_KEYWORDS = 5
EMPTY_BOARD_SUMMARY = "No cards to summarize yet. Start adding ideas!"

_LIST_PREFIX = re.compile(r'^(?:[\-\*•]+|\d+[\.\)])\s+')


def parse_suggestions(response: str, limit: int = SUGGESTION_COUNT) -> List[str]:
    """Split a completion into clean one-line suggestions."""
    suggestions = []
    for line in response.splitlines():
        cleaned = _LIST_PREFIX.sub('', line.strip()).strip()
        if cleaned:
            suggestions.append(cleaned)
    return suggestions[:limit]


class IdeaAssistant:
    """Brainstorming helpers for a board. Takes its text provider at construction."""

    def __init__(self, provider: ITextGenerationProvider):
        self.provider = provider

    def suggest_ideas(self, title: str, description: str, existing_cards: Sequence[str] = ()) -> List[str]:
        """
        Generate three ideas complementary to a card.

        Args:
            title: Card title
            description: Card description
            existing_cards: "title: description" lines of other cards on the board

        Returns:
            Exactly three suggestions when the provider answers usefully,
            otherwise three templated ones referencing the title
        """
        logger.log_operation("assistant.suggest", "started", sanitize_payload({
            "title": title,
            "context_cards": len(existing_cards)
        }))

        context_text = ""
        if existing_cards:
            context_text = "\n\nExisting ideas on the board:\n- " + "\n- ".join(existing_cards)

        prompt = f"""You are a creative brainstorming assistant. A user just added this idea to their brainstorming board:

Title: "{title}"
Description: "{description}"
{context_text}

Based on this new idea, generate 3 related and complementary suggestions that would help expand on this concept. The suggestions should be:
- Directly related to "{title}"
- Creative and diverse
- Actionable and specific
- One per line

Return ONLY the 3 suggestions, one per line, without numbering, bullet points, or extra formatting."""

        try:
            response = self.provider.generate(prompt, temperature=0.8, max_tokens=250)
        except TextProviderError as e:
            logger.log_provider_failure(self.provider.name, "suggest", e)
            return [
                f"Explore alternative approaches to {title}",
                f"Consider the user impact of {title}",
                f"Think about scaling {title}"
            ]

        suggestions = parse_suggestions(response)
        if suggestions:
            return suggestions

        return [
            f"Explore implementation details for {title}",
            f"Consider potential challenges with {title}",
            f"Research best practices for {title}"
        ]

    def analyze_mood(self, content: str) -> str:
        """Classify text as one of VALID_MOODS; 'neutral' when unsure or offline."""
        if not content or not content.strip():
            return DEFAULT_MOOD

        prompt = f"""Analyze the mood/sentiment of the following text and respond with ONLY ONE WORD from this list: {', '.join(VALID_MOODS)}.

Text: "{content}"

Respond with only the mood word, nothing else."""

        try:
            response = self.provider.generate(prompt, temperature=0.3, max_tokens=10)
        except TextProviderError as e:
            logger.log_provider_failure(self.provider.name, "mood", e)
            return DEFAULT_MOOD

        mood = response.strip().strip('.!').lower()
        return mood if mood in VALID_MOODS else DEFAULT_MOOD

    def summarize_board(self, cards: Sequence[CardRecord]) -> str:
        """
        Markdown summary of a board.

        Overview, mood and key themes are computed locally; ranked ideas,
        next steps and connections come from the provider, or from a
        template when it is unavailable.
        """
        if not cards:
            return EMPTY_BOARD_SUMMARY

        total_cards = len(cards)
        columns_count = len({card.column_id for card in cards})

        keywords = extract_keywords([card.text for card in cards], limit=SUMMARY_KEYWORDS)

        moods = Counter(card.mood for card in cards if card.mood)
        dominant_mood = moods.most_common(1)[0][0] if moods else DEFAULT_MOOD
        mood_emoji = MOOD_EMOJI.get(dominant_mood, '💭')

        clusters_found = len({card.cluster_id for card in cards if card.cluster_id})

        insights = self._board_insights(cards)

        key_themes = "\n".join(
            f"• **{capitalize_first(word)}** ({count} mentions)"
            for word, count in keywords
        ) or "• No recurring themes yet"

        cluster_info = ""
        if clusters_found > 0:
            plural = "s" if clusters_found > 1 else ""
            cluster_info = (f"\n\n**🎯 {clusters_found} idea cluster{plural} identified** - "
                            "Related concepts are grouping together naturally.")

        stage_plural = "s" if columns_count > 1 else ""

        return f"""## 📊 Board Overview
{total_cards} ideas across {columns_count} stage{stage_plural}
Overall mood: {mood_emoji} {capitalize_first(dominant_mood)}{cluster_info}

## 🎯 Key Themes
{key_themes}

{insights}

---
*Summary generated on {datetime.now().strftime('%Y-%m-%d')}*"""

    def _board_insights(self, cards: Sequence[CardRecord]) -> str:
        cards_list = "\n".join(
            f"{i + 1}. **{card.title}**" + (f": {card.description}" if card.description else "")
            for i, card in enumerate(cards)
        )

        prompt = f"""You are analyzing a brainstorming board with {len(cards)} ideas.

**Cards:**
{cards_list}

**Your task:** Provide a structured analysis in markdown format with these exact sections:

## 💡 Top Ideas
Rank the 3-5 most impactful/innovative ideas. For each, briefly explain why it stands out.

## 🚀 Recommended Next Steps
Suggest 3-5 concrete, actionable steps to move these ideas forward. Be specific.

## 🔗 Connections & Synergies
Identify 2-3 ways these ideas could work together or complement each other.

Use emojis, be concise, and focus on actionable insights."""

        try:
            insights = self.provider.generate(prompt, temperature=0.7, max_tokens=800)
        except TextProviderError as e:
            logger.log_provider_failure(self.provider.name, "summary", e)
            insights = ""

        return insights or self._fallback_insights(cards)

    @staticmethod
    def _fallback_insights(cards: Sequence[CardRecord]) -> str:
        top_titles = "\n".join(f"• **{card.title}**" for card in cards[:3])
        first_title = cards[0].title
        return f"""## 💡 Top Ideas
{top_titles}

## 🚀 Recommended Next Steps
• Pick one idea and define a first concrete milestone
• Add descriptions to cards that only have a title
• Review "{first_title}" with the team

## 🔗 Connections & Synergies
• Run clustering to see which ideas naturally group together"""
