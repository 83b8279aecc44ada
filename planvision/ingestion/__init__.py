from planvision.ingestion.ingestor import Ingestor, build_ingestor
from planvision.ingestion.models import IngestionConfig, IngestionOutcome

__all__ = ["IngestionConfig", "IngestionOutcome", "Ingestor", "build_ingestor"]
