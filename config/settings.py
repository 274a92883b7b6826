"""Application settings and configuration."""

import os
from pathlib import Path
from typing import Dict, Any

# Base directory
BASE_DIR = Path(__file__).parent.parent

# Data paths
DATA_DIR = BASE_DIR / "data"
FARM_PROFILE_FILE = Path(os.getenv("FARM_PROFILE_FILE", str(DATA_DIR / "farm_profiles.csv")))
FARM_ZONE_FILE = Path(os.getenv("FARM_ZONE_FILE", str(DATA_DIR / "farm_zones.json")))

# Default classification thresholds
DEFAULT_THRESHOLDS = {
    "high_min_score": 75.0,
    "high_min_yield": 3.5,
    "low_max_score": 50.0,
    "low_max_yield": 2.0,
}

# Factor weights for productivity score calculation
FACTOR_WEIGHTS = {
    "yield_consistency": 0.30,
    "soil_quality": 0.25,
    "moisture_adequacy": 0.25,
    "seasonal_performance": 0.20,
}

# Crop-specific configurations
CROP_CONFIGS: Dict[str, Dict[str, Any]] = {
    "Maize": {
        "thresholds": {
            "high_min_score": 75.0,
            "high_min_yield": 4.0,
            "low_max_score": 50.0,
            "low_max_yield": 2.5,
        },
        "expected_yield_range": (2.0, 6.0),
    },
    "Rice": {
        "thresholds": {
            "high_min_score": 70.0,
            "high_min_yield": 3.5,
            "low_max_score": 45.0,
            "low_max_yield": 2.0,
        },
        "expected_yield_range": (1.5, 5.0),
    },
    "Cassava": {
        "thresholds": {
            "high_min_score": 70.0,
            "high_min_yield": 15.0,
            "low_max_score": 45.0,
            "low_max_yield": 8.0,
        },
        "expected_yield_range": (5.0, 25.0),
    },
    "Yam": {
        "thresholds": {
            "high_min_score": 72.0,
            "high_min_yield": 12.0,
            "low_max_score": 48.0,
            "low_max_yield": 6.0,
        },
        "expected_yield_range": (4.0, 20.0),
    },
    "Groundnut": {
        "thresholds": {
            "high_min_score": 75.0,
            "high_min_yield": 2.5,
            "low_max_score": 50.0,
            "low_max_yield": 1.2,
        },
        "expected_yield_range": (0.8, 3.5),
    },
    "Sorghum": {
        "thresholds": {
            "high_min_score": 73.0,
            "high_min_yield": 3.0,
            "low_max_score": 48.0,
            "low_max_yield": 1.5,
        },
        "expected_yield_range": (1.0, 4.5),
    },
    "Millet": {
        "thresholds": {
            "high_min_score": 70.0,
            "high_min_yield": 2.0,
            "low_max_score": 45.0,
            "low_max_yield": 1.0,
        },
        "expected_yield_range": (0.5, 3.0),
    },
}

# Regional adjustment factors
REGIONAL_ADJUSTMENTS: Dict[str, Dict[str, float]] = {
    "Northern Nigeria": {
        "yield_adjustment": 0.9,  # Arid conditions
        "moisture_weight": 0.35,
    },
    "Middle Belt": {
        "yield_adjustment": 1.0,
        "moisture_weight": 0.25,
    },
    "Southern Nigeria": {
        "yield_adjustment": 1.1,  # Abundant rainfall
        "moisture_weight": 0.20,
    },
}

# Urgency calculation for critical farms
URGENCY_SETTINGS = {
    "base_multiplier": 2.0,
    "critical_yield_threshold": 1.5,
    "severe_yield_threshold": 2.0,
    "critical_yield_penalty": 25.0,
    "severe_yield_penalty": 15.0,
    "declining_trend_penalty": 25.0,
}

# Trend analysis for future zone prediction
TREND_SETTINGS = {
    "relative_slope_tolerance": 0.02,  # Per season, relative to series mean
    "horizon": 2,  # Seasons to project
    "min_points": 3,
}

# Improvement strategies per zone
IMPROVEMENT_STRATEGIES: Dict[str, Dict[str, Any]] = {
    "high-yield": {
        "strategies": [
            {
                "title": "Precision agriculture adoption",
                "description": "Use soil sensors and variable-rate inputs to protect current yields",
                "priority": "medium",
                "estimated_impact": "5-10% yield stability gain",
                "timeframe": "1-2 seasons",
                "cost": "high",
            },
            {
                "title": "Cultivation area expansion",
                "description": "Extend proven practices to adjacent land",
                "priority": "low",
                "estimated_impact": "Proportional production increase",
                "timeframe": "2-3 seasons",
                "cost": "medium",
            },
        ],
        "success_metrics": [
            "Productivity score stays above 75",
            "Yield coefficient of variation below 10%",
        ],
    },
    "moderate-yield": {
        "strategies": [
            {
                "title": "Soil fertility programme",
                "description": "Soil testing followed by targeted fertilization and organic matter",
                "priority": "high",
                "estimated_impact": "10-20% yield increase",
                "timeframe": "1-2 seasons",
                "cost": "medium",
            },
            {
                "title": "Irrigation scheduling",
                "description": "Align watering with crop stage and measured soil moisture",
                "priority": "medium",
                "estimated_impact": "5-15% yield increase",
                "timeframe": "1 season",
                "cost": "low",
            },
        ],
        "success_metrics": [
            "Average yield above 3.5 t/ha",
            "Soil quality score above 6",
        ],
    },
    "low-yield": {
        "strategies": [
            {
                "title": "Soil rehabilitation",
                "description": "Comprehensive soil analysis, liming and intensive organic amendment",
                "priority": "high",
                "estimated_impact": "20-40% yield increase",
                "timeframe": "2-3 seasons",
                "cost": "medium",
            },
            {
                "title": "Irrigation installation",
                "description": "Install basic irrigation where moisture is inadequate",
                "priority": "high",
                "estimated_impact": "15-30% yield increase",
                "timeframe": "1-2 seasons",
                "cost": "high",
            },
            {
                "title": "Crop rotation",
                "description": "Rotate with legumes or switch to better-suited crops",
                "priority": "medium",
                "estimated_impact": "10-25% yield increase",
                "timeframe": "2 seasons",
                "cost": "low",
            },
        ],
        "success_metrics": [
            "Average yield above 2.0 t/ha",
            "Productivity score above 50",
            "Moisture levels within 40-70%",
        ],
    },
}

# API settings
API_SETTINGS = {
    "title": "Farm Zone Classification API",
    "description": "API for classifying farms into productivity zones",
    "version": "1.0.0",
}

# Logging settings
LOG_SETTINGS = {
    "level": os.getenv("LOG_LEVEL", "INFO").upper(),
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
