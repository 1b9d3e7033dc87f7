# src/canoe_paddle/__init__.py
"""
canoe-paddle: compilador de pipelines declarativos em pods Kubernetes.

Cada step de um pipeline vira uma unidade de execução (pod) com dois
containers: `main`, que roda os comandos do step, e `paddle`, que busca
os inputs no storage remoto e publica o output. Os dois se coordenam
apenas por sentinelas write-once em um volume compartilhado.

Arquitetura em alto nível:
    - core.config   → configuração (arquivos + ambiente) e settings tipados
    - core.pipeline → modelo, parser e overrides da definição de pipeline
    - core.compiler → descritor de pod, scripts do protocolo e renderização
    - core.storage  → seleção all-or-nothing de objetos, commit e fetch
    - core.protocol → máquinas de estado main/paddle em Python
    - core.engine   → fachada de compilação

Limites explícitos:
    - Não submete pods ao cluster
    - Não implementa o cliente real do object store
"""

__version__ = "0.1.0"
