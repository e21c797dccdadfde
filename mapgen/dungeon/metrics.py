from typing import Any, Dict


def init_metrics() -> Dict[str, Any]:
    return {
        'iterations': 0,
        'walls_total': 0,
        'walls_opened': 0,
        'walls_remaining': 0,
        'separating_picks': 0,
        'random_picks': 0,
        'separating_fallbacks': 0,
        'connectivity_checks': 0,
        'components_final': 0,
        'voxels_emitted': 0,
        'runtime_ms': 0.0,
    }
