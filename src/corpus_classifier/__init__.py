"""corpus_classifier

Map-only batch job that labels every document of a corpus with the category
predicted by a pre-trained text classification model.

Public API surface:
- corpus_classifier.cli.main : job driver entrypoint
- corpus_classifier.pipeline.job.configure_job / submit_job : build and run a job
- corpus_classifier.stages.text_classification : per-document classification stage
- corpus_classifier.plugins.registry : add/extend classifier providers
"""
__all__ = ["__version__"]
__version__ = "0.1.0"
