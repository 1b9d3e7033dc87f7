# tests/conftest.py
"""
Fixtures compartilhados para testes do canoe-paddle.

Fornecem:
- um documento de pipeline de referência (dois steps, inputs, secrets)
- settings determinísticos (poll/timeout curtos)
- um relógio falso para as máquinas de estado do protocolo

Invariantes:
    - Nenhuma fixture acessa rede ou variáveis de ambiente reais
    - Imports do core são lazy para manter mensagens de erro claras
"""

import pytest


SAMPLE_PIPELINE_YAML = """\
pipeline: Sample_Pipeline
bucket: "{{ bucket | default('canoe-sample-pipeline') }}"
namespace: modeltraining
secrets:
  - DB_PASSWORD:db-credentials:password
steps:
  - step: step1
    version: version1
    branch: master
    image: repo/image1:latest
    inputs:
      - step: step0
        version: version0
        branch: master
        path: HEAD
    commands:
      - echo hello
      - python train.py
    resources:
      cpu: 2
      memory: 2Gi
      storage-mb: 1000
  - step: Step_2
    version: version1
    branch: feature/new_thing
    image: repo/image2:1.0
    inputs:
      - step: step1
        version: version1
        branch: master
        path: ""
        bucket: other-bucket
    commands:
      - ./run.sh
    resources:
      cpu: 1
      memory: 512Mi
"""


@pytest.fixture
def sample_pipeline_yaml() -> str:
    return SAMPLE_PIPELINE_YAML


@pytest.fixture
def sample_definition(sample_pipeline_yaml):
    from canoe_paddle.core.pipeline.parser import parse_pipeline

    return parse_pipeline(sample_pipeline_yaml)


@pytest.fixture
def fast_settings():
    from canoe_paddle.core.config.settings import PaddleSettings

    return PaddleSettings(
        bucket="fallback-bucket",
        poll_interval_seconds=0.5,
        timeout_seconds=30.0,
    )


class FakeClock:
    """Relógio manual: `sleep` apenas avança o tempo."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
