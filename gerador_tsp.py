import json
import random

# Área dos pontos gerados e casas decimais das coordenadas
MAX_X = 1000.0
MAX_Y = 1000.0
CASAS_DECIMAIS = 2


def gerar_pontos(num_pontos, seed=None, max_x=MAX_X, max_y=MAX_Y):
    """Gera pontos uniformes em [0, max_x) x [0, max_y) com ids 0..N-1."""
    rng = random.Random(seed)

    pontos = []
    for i in range(num_pontos):
        x = round(rng.uniform(0, max_x), CASAS_DECIMAIS)
        y = round(rng.uniform(0, max_y), CASAS_DECIMAIS)
        pontos.append({'x': x, 'y': y, 'id': i})
    return pontos


def gerar_arquivo_tsp(num_pontos, nome_arquivo=None, seed=None):
    if nome_arquivo is None:
        nome_arquivo = f"points{num_pontos}.json"

    print(f"Gerando {nome_arquivo} com {num_pontos} pontos...")

    with open(nome_arquivo, 'w', encoding='utf-8') as f:
        json.dump({'points': gerar_pontos(num_pontos, seed)}, f, indent=2)

    print(f"Arquivo {nome_arquivo} concluído com sucesso!")
    return nome_arquivo

# Tamanhos em que a busca exata ainda termina
instancias = [10, 12, 16]

if __name__ == "__main__":
    for n in instancias:
        gerar_arquivo_tsp(n, seed=n)
