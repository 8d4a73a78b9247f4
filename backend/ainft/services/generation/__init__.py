from ainft.services.generation.handler import GenerationHandler
from ainft.services.generation.service import NFTGenerationService

__all__ = ["GenerationHandler", "NFTGenerationService"]
