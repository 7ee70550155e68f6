"""
knnbayes - Dataset Generator

Generates a synthetic labeled dataset from configs/generate.yaml and writes
it as CSV or JSON. Any value can be overridden on the command line, e.g.
``python generate.py record_count=500 output.format=json``.
"""

import hydra
from omegaconf import DictConfig, OmegaConf
from pathlib import Path

from knnbayes.data.generator import GeneratorConfig, generate_dataset
from knnbayes.errors import KnnBayesError
from knnbayes.utils.helpers import ensure_dir

OUTPUT_FORMATS = ('csv', 'json')


@hydra.main(version_base=None, config_path="configs", config_name="generate")
def main(cfg: DictConfig) -> None:
    """Generate a dataset and write it to cfg.output.path."""
    print("knnbayes Dataset Generator")
    print("=" * 40)

    print("\n1. Configuration loaded via Hydra:")
    print(OmegaConf.to_yaml(cfg))

    output_format = str(cfg.output.format).lower()
    if output_format not in OUTPUT_FORMATS:
        print(f"   ✗ {output_format} is not a valid format, use csv or json")
        return

    print("\n2. Generating records...")
    try:
        dataset = generate_dataset(GeneratorConfig.from_cfg(cfg))
    except KnnBayesError as e:
        print(f"   ✗ Error generating dataset: {e}")
        return
    dataset.print_summary("Generated Dataset Summary")

    output_path = Path(hydra.utils.to_absolute_path(cfg.output.path))
    ensure_dir(str(output_path.parent))
    text = dataset.to_csv() if output_format == 'csv' else dataset.to_json()
    output_path.write_text(text)

    print(f"\n3. Dataset saved: {output_path}")


if __name__ == "__main__":
    main()
