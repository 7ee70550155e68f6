"""
knnbayes - Main Entry Point

This script runs the classification pipeline:
1. Load configuration (via Hydra)
2. Load dataset
3. Split dataset into training/test data
4. Train the configured classifiers (KNN, Naive Bayes, or both)
5. Evaluate each classifier on its held-out test data
"""

import hydra
from omegaconf import DictConfig, OmegaConf
from pathlib import Path
from sklearn.metrics import classification_report

from knnbayes.data.dataset import SplitConfig
from knnbayes.errors import KnnBayesError
from knnbayes.models.KNN import KNNClassifier
from knnbayes.models.naive_bayes import NaiveBayesClassifier
from knnbayes.models.registry import ModelRegistry
from knnbayes.training.trainer import Trainer
from knnbayes.utils.helpers import load_dataset, save_results


def build_models(cfg: DictConfig, registry: ModelRegistry) -> list:
    """
    Create the classifiers selected by cfg.model.type and register them.

    Args:
        cfg: Hydra config object
        registry: Registry receiving the new classifiers

    Returns:
        List of (model_id, classifier) tuples.
    """
    model_type = getattr(cfg.model, 'type', 'knn')

    models = []
    if model_type in ['knn', 'both']:
        models.append(KNNClassifier(cfg=cfg.model.knn))
    if model_type in ['naive_bayes', 'both']:
        models.append(NaiveBayesClassifier(cfg=cfg.model.naive_bayes))

    if not models:
        raise KnnBayesError(f"Unknown model type: {model_type}",
                            hint="use knn, naive_bayes or both")

    return [(registry.add(model), model) for model in models]


def print_analysis(model_name: str, results, analysis, class_names) -> None:
    """Print overall metrics and the per-class report for one model."""
    print(f"\n   Overall Metrics ({model_name}):")
    print(f"   {'='*40}")
    print(f"   Results:   {analysis.result_count}")
    print(f"   Correct:   {analysis.correct_count}")
    print(f"   Incorrect: {analysis.incorrect_count}")
    print(f"   Accuracy:  {analysis.accuracy*100:.2f}%")

    if not results:
        return

    y_true = [result.record.label for result in results]
    y_pred = [result.predicted for result in results]
    labels = list(range(len(class_names)))

    print(f"\n   Per-Class Report:")
    print(f"   {'='*40}")
    print(classification_report(y_true, y_pred, labels=labels,
                                target_names=class_names, zero_division=0))


@hydra.main(version_base=None, config_path="configs", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main function to run the classification pipeline."""
    print("knnbayes Classifier")
    print("=" * 40)

    print("\n1. Configuration loaded via Hydra:")
    print(OmegaConf.to_yaml(cfg))

    data_path = Path(hydra.utils.to_absolute_path(cfg.data.path))
    print(f"   - Dataset: {data_path}")

    print("\n2. Loading dataset...")
    try:
        dataset = load_dataset(data_path)
    except KnnBayesError as e:
        print(f"   ✗ Error loading dataset: {e}")
        return
    dataset.print_summary("Full Dataset Summary")

    print("\n3. Initializing models...")
    registry = ModelRegistry()
    models = build_models(cfg, registry)
    for model_id, model in models:
        print(f"   - [{model_id}] {model.classifier_type} {model.config()}")

    split_config = SplitConfig.from_cfg(cfg.data)
    print(f"\n4. Training (share={split_config.training_share}, method={split_config.method.value})...")

    for model_id, model in models:
        print(f"\n   --- {model.classifier_type} ---")
        trainer = Trainer(model, split_config)
        try:
            trainer.train(dataset)
            results, analysis = trainer.evaluate()
        except KnnBayesError as e:
            print(f"   ✗ {e}")
            continue

        training, testing = model.data()
        print(f"   Training records: {len(training)}, Test records: {len(testing)}")
        print_analysis(model.classifier_type, results, analysis, dataset.class_names)

        if cfg.output.save_results:
            output_path = Path(cfg.output.dir) / f"model_{model_id}_results.json"
            save_results(results, analysis, output_path)
            print(f"   Results saved: {output_path}")

    print("\n" + "="*40)
    print("Pipeline Complete!")


if __name__ == "__main__":
    main()
