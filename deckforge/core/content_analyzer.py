"""
Content Analyzer for deckforge

Turns raw presentation text plus an audience into a ContentAnalysisResult:
narrative framing, key messages, content density and the ordered list of
slides to generate.

The analyzer is keyword/heuristic only. Conditional slides carry fixed
template talking points; the input text decides WHICH slides appear, not
what they say.

Usage:
    analyzer = ContentAnalyzer()
    result = analyzer.analyze(text, Audience.EXECUTIVE)
"""

import re
from typing import List, Sequence, Tuple

from deckforge.models.content import (
    Audience,
    ContentAnalysisResult,
    ContentDensity,
    InformationHierarchy,
    MessagingFramework,
    NarrativeFlow,
    SlideRecommendation,
    SlideType
)
from deckforge.utils.logger import setup_logger

logger = setup_logger(__name__)


class ContentAnalyzer:
    """
    Heuristic content analyzer.

    Detects:
    - Cognitive load (word count buckets of 50)
    - Key messages (sentences with importance vocabulary)
    - Which narrative slides the text supports (trigger keywords)
    """

    WORDS_PER_LOAD_POINT = 50
    MAX_COGNITIVE_LOAD = 10
    MAX_KEY_MESSAGES = 5
    MIN_SENTENCE_LENGTH = 10

    SENTENCE_SPLIT = re.compile(r'[.!?]+')

    IMPORTANCE_TERMS = (
        'key', 'important', 'critical', 'essential', 'primary', 'main',
        'result', 'outcome', 'benefit', 'advantage', 'value', 'impact'
    )

    # Fixed slide templates: (type, priority, seconds, talking points)
    HERO_TEMPLATE = (
        SlideType.HERO, 1, 30,
        ('Title', 'Subtitle', 'Key value proposition')
    )
    ACTION_TEMPLATE = (
        SlideType.ACTION, 5, 45,
        ('Next steps', 'Call to action', 'Contact information')
    )

    # Conditional slides, in deck order, with their trigger keywords
    CONDITIONAL_TEMPLATES: Tuple[Tuple[Tuple[str, ...], tuple], ...] = (
        (
            ('problem', 'challenge'),
            (SlideType.PROBLEM, 2, 60,
             ('Problem statement', 'Current state challenges', 'Impact quantification'))
        ),
        (
            ('solution', 'approach'),
            (SlideType.SOLUTION, 3, 90,
             ('Solution overview', 'Key features', 'Implementation approach'))
        ),
        (
            ('result', 'benefit'),
            (SlideType.EVIDENCE, 4, 60,
             ('Key results', 'Success metrics', 'Validation points'))
        ),
    )

    # =========================================================================
    # MAIN ANALYSIS METHOD
    # =========================================================================

    def analyze(self, content: str, audience=Audience.GENERAL) -> ContentAnalysisResult:
        """
        Analyze presentation content.

        Never raises on degenerate input: empty or non-string content yields
        the low-density default deck (hero + action).

        Args:
            content: Raw presentation text
            audience: Audience enum or string (unknown values -> general)

        Returns:
            ContentAnalysisResult
        """
        text = content if isinstance(content, str) else ""
        audience = Audience.coerce(audience)

        word_count = len(text.split())
        cognitive_load_score = self.cognitive_load(word_count)
        content_density = ContentDensity.from_cognitive_load(cognitive_load_score)

        if audience == Audience.EXECUTIVE:
            narrative_flow = NarrativeFlow.PYRAMID_PRINCIPLE
        else:
            narrative_flow = NarrativeFlow.PROBLEM_SOLUTION

        key_messages = self.extract_key_messages(text)
        slide_recommendations = self.recommend_slides(text)

        logger.debug(
            f"ContentAnalyzer: words={word_count} load={cognitive_load_score} "
            f"density={content_density.value} slides="
            f"{[rec.slide_type.value for rec in slide_recommendations]}"
        )

        return ContentAnalysisResult(
            narrative_flow=narrative_flow,
            information_hierarchy=InformationHierarchy.PRIMARY,
            messaging_framework=MessagingFramework.MCKINSEY_SCCE,
            word_count=word_count,
            cognitive_load_score=cognitive_load_score,
            key_messages=key_messages,
            audience_adaptation=audience,
            content_density=content_density,
            slide_recommendations=slide_recommendations
        )

    # =========================================================================
    # HEURISTICS
    # =========================================================================

    def cognitive_load(self, word_count: int) -> int:
        """One load point per 50 words, capped at 10."""
        return min(self.MAX_COGNITIVE_LOAD, max(0, word_count) // self.WORDS_PER_LOAD_POINT)

    def extract_key_messages(self, content: str) -> List[str]:
        """Return up to 5 sentences that use importance vocabulary, in text order."""
        messages = []
        for sentence in self.SENTENCE_SPLIT.split(content):
            sentence = sentence.strip()
            if len(sentence) <= self.MIN_SENTENCE_LENGTH:
                continue
            lowered = sentence.lower()
            if any(term in lowered for term in self.IMPORTANCE_TERMS):
                messages.append(sentence)
                if len(messages) == self.MAX_KEY_MESSAGES:
                    break
        return messages

    def recommend_slides(self, content: str) -> List[SlideRecommendation]:
        """Hero first, triggered narrative slides in fixed order, action last."""
        lowered = content.lower()

        recommendations = [self._from_template(self.HERO_TEMPLATE)]
        for triggers, template in self.CONDITIONAL_TEMPLATES:
            if any(trigger in lowered for trigger in triggers):
                recommendations.append(self._from_template(template))
        recommendations.append(self._from_template(self.ACTION_TEMPLATE))

        return recommendations

    def _from_template(self, template) -> SlideRecommendation:
        slide_type, priority, seconds, points = template
        return SlideRecommendation(
            slide_type=slide_type,
            priority=priority,
            estimated_time=seconds,
            content_points=list(points)
        )


def optimize_cognitive_load(content_points: Sequence[str], max_items: int = 7) -> List[str]:
    """
    Keep a bullet list within working-memory limits.

    Args:
        content_points: Talking points in priority order
        max_items: Maximum number of points to keep

    Returns:
        The first max_items points
    """
    if max_items < 0:
        max_items = 0
    return list(content_points[:max_items])


# Convenience function
def analyze_content(content: str, audience=Audience.GENERAL) -> ContentAnalysisResult:
    """
    Analyze presentation content (convenience function).

    Args:
        content: Raw presentation text
        audience: Target audience

    Returns:
        ContentAnalysisResult
    """
    analyzer = ContentAnalyzer()
    return analyzer.analyze(content, audience)
