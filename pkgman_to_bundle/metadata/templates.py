"""
Bundle Metadata Templates

Jinja2 templates for bundle.Dockerfile and metadata/annotations.yaml, plus
the static scorecard configuration. Both templates render the same values.
"""

import json

import yaml
from jinja2 import Environment, StrictUndefined


def yaml_scalar(value: str) -> str:
    """
    Render a string as a YAML scalar that reads back as the same string.

    Plain text is left unquoted. Text YAML would read as another value,
    such as 4.10 or true, is double-quoted.
    """
    text = str(value)
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError:
        return json.dumps(text)
    return text if text and parsed == text else json.dumps(text)


def to_yaml_label(label: str) -> str:
    """Turn a Dockerfile 'key=value' label into a YAML 'key: value' pair"""
    key, _, value = label.partition('=')
    return f"{key}: {yaml_scalar(value)}"


ENVIRONMENT = Environment(undefined=StrictUndefined, keep_trailing_newline=True, autoescape=False)
ENVIRONMENT.filters['to_yaml'] = to_yaml_label
ENVIRONMENT.filters['yaml_scalar'] = yaml_scalar

DOCKERFILE_TEMPLATE = ENVIRONMENT.from_string("""FROM scratch

# Core bundle labels.
LABEL operators.operatorframework.io.bundle.mediatype.v1=registry+v1
LABEL operators.operatorframework.io.bundle.manifests.v1=manifests/
LABEL operators.operatorframework.io.bundle.metadata.v1=metadata/
LABEL operators.operatorframework.io.bundle.package.v1={{ package_name }}
LABEL operators.operatorframework.io.bundle.channels.v1={{ channels }}
{%- if default_channel %}
LABEL operators.operatorframework.io.bundle.channel.default.v1={{ default_channel }}
{%- endif %}
{%- for label in other_labels %}
LABEL {{ label }}
{%- endfor %}

# Labels for testing.
LABEL operators.operatorframework.io.test.mediatype.v1=scorecard+v1
LABEL operators.operatorframework.io.test.config.v1=tests/scorecard/

# Copy files to locations specified by labels.
COPY manifests /manifests/
COPY metadata /metadata/
COPY tests/scorecard /tests/scorecard/
""")

ANNOTATIONS_TEMPLATE = ENVIRONMENT.from_string("""annotations:
  # Core bundle annotations.
  operators.operatorframework.io.bundle.mediatype.v1: registry+v1
  operators.operatorframework.io.bundle.manifests.v1: manifests/
  operators.operatorframework.io.bundle.metadata.v1: metadata/
  operators.operatorframework.io.bundle.package.v1: {{ package_name | yaml_scalar }}
  operators.operatorframework.io.bundle.channels.v1: {{ channels | yaml_scalar }}
  {%- if default_channel %}
  operators.operatorframework.io.bundle.channel.default.v1: {{ default_channel | yaml_scalar }}
  {%- endif %}
  {%- for label in other_labels %}
  {{ label | to_yaml }}
  {%- endfor %}

  # Annotations for testing.
  operators.operatorframework.io.test.mediatype.v1: scorecard+v1
  operators.operatorframework.io.test.config.v1: tests/scorecard/
""")

SCORECARD_CONFIG = """apiVersion: scorecard.operatorframework.io/v1alpha3
kind: Configuration
metadata:
  name: config
stages:
- parallel: true
  tests:
  - entrypoint:
    - scorecard-test
    - basic-check-spec
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: basic
      test: basic-check-spec-test
  - entrypoint:
    - scorecard-test
    - olm-bundle-validation
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: olm
      test: olm-bundle-validation-test
  - entrypoint:
    - scorecard-test
    - olm-crds-have-validation
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: olm
      test: olm-crds-have-validation-test
  - entrypoint:
    - scorecard-test
    - olm-crds-have-resources
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: olm
      test: olm-crds-have-resources-test
  - entrypoint:
    - scorecard-test
    - olm-spec-descriptors
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: olm
      test: olm-spec-descriptors-test
  - entrypoint:
    - scorecard-test
    - olm-status-descriptors
    image: quay.io/operator-framework/scorecard-test:v1.5.0
    labels:
      suite: olm
      test: olm-status-descriptors-test
"""
