"""
CreativeWizard - drives one CreativeWizardState through the generation calls.

Every generation method checks its own preconditions (independently of the
step guards), clears the previous error, and on failure records the error on
the state before re-raising it unchanged.
"""

import logging
from typing import Callable, List, Optional
from uuid import uuid4

from ...core.config import Config
from ...core.errors import MissingRequiredData
from ...core.models import AdCopy, AdPlatform, Creative, CreativeStyle, MediaGeneration, Product
from ...services.ai_service import AIService
from ...services.media_service import MediaService
from .state import CreativeWizardState, WizardStep

logger = logging.getLogger(__name__)

WizardObserver = Callable[[CreativeWizardState], None]


class CreativeWizard:
    """
    Multi-step creative production flow.

    Args:
        ai_service: Concept, media and copy generation
        media_service: Validation pass for generated media
        state: Existing state to resume (a fresh one is created otherwise)
        concept_variations: How many concepts to request per generation
    """

    def __init__(
        self,
        ai_service: AIService,
        media_service: MediaService,
        state: Optional[CreativeWizardState] = None,
        concept_variations: Optional[int] = None,
    ):
        self.ai_service = ai_service
        self.media_service = media_service
        self.state = state or CreativeWizardState()
        self.concept_variations = (
            concept_variations if concept_variations is not None else Config.CONCEPT_VARIATIONS
        )
        self._observers: List[WizardObserver] = []

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, callback: WizardObserver) -> Callable[[], None]:
        """Register a callback run after every state change; returns an unsubscribe function."""
        self._observers.append(callback)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._observers):
            callback(self.state)

    # =========================================================================
    # Selections and navigation
    # =========================================================================

    def set_product(self, product: Product) -> None:
        self.state.product = product
        self._notify()

    def set_style(self, style: CreativeStyle) -> None:
        self.state.style = style
        self._notify()

    def toggle_platform(self, platform: AdPlatform) -> None:
        self.state.toggle_platform(platform)
        self._notify()

    def select_concept(self, concept: str) -> None:
        """
        Raises:
            ValueError: If the concept was not among the generated concepts
        """
        if concept not in self.state.generated_concepts:
            raise ValueError("Concept must be one of the generated concepts")
        self.state.selected_concept = concept
        self._notify()

    def advance(self) -> WizardStep:
        step = self.state.advance()
        self._notify()
        return step

    def go_back(self) -> WizardStep:
        step = self.state.go_back()
        self._notify()
        return step

    # =========================================================================
    # Generation
    # =========================================================================

    def _begin(self) -> None:
        self.state.is_loading = True
        self.state.error = None
        self.state.error_step = None
        self._notify()

    def _fail(self, error: Exception) -> None:
        logger.error(f"Wizard step {self.state.current_step.value} failed: {error}")
        self.state.mark_error(error)
        self._notify()

    async def generate_concepts(self) -> List[str]:
        """
        Generate concepts for the selected product, style and platforms.

        Raises:
            MissingRequiredData: If product, style or platforms are unset
        """
        state = self.state
        if state.product is None or state.style is None or not state.platforms:
            raise MissingRequiredData()

        self._begin()
        try:
            concepts = await self.ai_service.generate_concepts(
                product=state.product,
                style=state.style,
                platforms=list(state.platforms),
                variation_count=self.concept_variations,
            )
        except Exception as e:
            self._fail(e)
            raise

        state.generated_concepts = concepts
        if state.selected_concept not in concepts:
            state.selected_concept = None
        state.is_loading = False
        self._notify()
        return concepts

    async def generate_media(self) -> MediaGeneration:
        """
        Generate and validate media for the selected concept.

        Raises:
            MissingRequiredData: If product, style or selected concept is unset
        """
        state = self.state
        if state.product is None or state.style is None or state.selected_concept is None:
            raise MissingRequiredData()

        self._begin()
        try:
            generation = await self.ai_service.generate_media(
                concept=state.selected_concept,
                product=state.product,
                style=state.style,
            )
            processed = await self.media_service.process_media(generation.data, generation.type)
        except Exception as e:
            self._fail(e)
            raise

        state.generated_media = MediaGeneration(
            data=processed,
            type=generation.type,
            format=generation.format,
        )
        state.is_loading = False
        self._notify()
        return state.generated_media

    async def generate_ad_copy(self, platform: Optional[AdPlatform] = None) -> AdCopy:
        """
        Generate ad copy for ``platform`` (default: first selected platform).

        Raises:
            MissingRequiredData: If product or style is unset, or no platform
                is given or selected
        """
        state = self.state
        if state.product is None or state.style is None:
            raise MissingRequiredData()
        if platform is None:
            if not state.platforms:
                raise MissingRequiredData("Select a platform before generating ad copy")
            platform = state.platforms[0]

        self._begin()
        try:
            ad_copy = await self.ai_service.generate_ad_copy(
                product=state.product,
                style=state.style,
                platform=platform,
            )
        except Exception as e:
            self._fail(e)
            raise

        state.generated_ad_copy = ad_copy
        state.is_loading = False
        self._notify()
        return ad_copy

    def create_creative(self) -> Creative:
        """
        Assemble a Creative from the product, generated media and ad copy.

        The media URL stays empty until the media is uploaded.

        Raises:
            MissingRequiredData: If product, media or ad copy is missing
        """
        state = self.state
        if state.product is None or state.generated_media is None or state.generated_ad_copy is None:
            raise MissingRequiredData()

        creative = Creative(
            id=uuid4(),
            product_id=state.product.id,
            type=state.generated_media.type,
            format=state.generated_media.format,
            media_url="",
            headline=state.generated_ad_copy.headline,
            description=state.generated_ad_copy.description,
            call_to_action=state.generated_ad_copy.call_to_action,
        )
        logger.info(f"Created creative {creative.id} for product {state.product.id}")
        return creative
