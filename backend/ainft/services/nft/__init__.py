from ainft.services.nft.gallery_service import NFTGalleryService
from ainft.services.nft.handler import NFTHandler
from ainft.services.nft.mint_service import ServerMintService

__all__ = ["NFTGalleryService", "NFTHandler", "ServerMintService"]
