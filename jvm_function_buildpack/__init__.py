"""Cloud Native Buildpack build phase for Java functions."""
