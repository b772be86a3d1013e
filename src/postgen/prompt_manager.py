# prompt management, loads and saves prompt templates from text files
import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import settings
from .models import PostType, ProjectType, PromptInfo

logger = logging.getLogger(__name__)

class PromptError(Exception):
    """Prompt template could not be loaded or saved"""

# descriptions of each project type appended to the system prompt
PROJECT_TYPE_CONTEXT = {
    ProjectType.MROOMYGO: """## TYP PROJEKTU: MroomyGO

**Charakterystyka:**
- Szybki projekt metamorfozy w 10 dni roboczych
- Wizualizacje 3D + lista zakupów z linkami
- Darmowa dostawa
- Wykorzystanie gotowych mebli dostępnych na rynku
- Optymalizacja kosztów bez utraty jakości

**W poście podkreślaj:**
- Krótki czas realizacji (10 dni)
- Prostotę procesu
- Praktyczne rozwiązania
- Dostępność produktów""",
    ProjectType.PREMIUM: """## TYP PROJEKTU: Premium

**Charakterystyka:**
- Kompleksowy projekt pokoju z rysunkami technicznymi
- Wykorzystanie gotowych mebli dostępnych na rynku
- Bardziej dopracowane detale niż MroomyGO
- Dokładne planowanie przestrzeni
- Profesjonalne wizualizacje 3D

**W poście podkreślaj:**
- Kompleksowość projektu
- Dopracowanie detali
- Funkcjonalność rozwiązań
- Wykorzystanie dostępnych mebli w przemyślany sposób""",
    ProjectType.PREMIUM_PLUS: """## TYP PROJEKTU: Premium+

**Charakterystyka:**
- Kompleksowy projekt pokoju z rysunkami technicznymi
- **Meble projektowane na wymiar** do wykonania przez stolarza
- Najwyższy poziom personalizacji
- Unikalne rozwiązania dopasowane idealnie do przestrzeni
- Maksymalna funkcjonalność

**W poście podkreślaj:**
- Meble na wymiar (kluczowe!)
- Idealne dopasowanie do potrzeb rodziny
- Unikalne rozwiązania niemożliwe z gotowymi meblami
- Maksymalne wykorzystanie przestrzeni
- Najwyższa jakość wykonania""",
}

PROJECT_TYPE_NAMES = {
    ProjectType.MROOMYGO: "MroomyGO - szybki projekt w 10 dni",
    ProjectType.PREMIUM: "Premium - kompleksowy projekt z gotowymi meblami",
    ProjectType.PREMIUM_PLUS: "Premium+ - kompleksowy projekt z meblami na wymiar",
}

USER_PROMPT_TEMPLATE = """Przeanalizuj załączoną ankietę klienta (PDF) oraz wizualizacje pokoju (zdjęcia).

**Typ projektu:** {project_name}

**Zadanie:**
1. Wyciągnij z ankiety kluczowe informacje:
   - Imię i wiek dziecka
   - Zainteresowania i hobby
   - Ulubione kolory
   - Specjalne wymagania
   - Wyzwania projektowe

2. Przeanalizuj wizualizacje i zidentyfikuj:
   - Kluczowe elementy projektu
   - Rozwiązania przestrzenne
   - Strefy funkcjonalne
   - Palety kolorystyczne

3. Wygeneruj kompletny post zgodnie z promptem systemowym.

4. **BARDZO WAŻNE - Format odpowiedzi:**

Najpierw podaj treść posta (wszystko co ma być skopiowane do Facebooka/Instagrama).

Następnie dodaj separatorem i sekcję z kolejnością zdjęć:

---

## SUGEROWANA KOLEJNOŚĆ ZDJĘĆ:

1. [Krótki opis pierwszego zdjęcia - np. "Hero shot z pełnym widokiem pokoju pokazujący całą przestrzeń"]
2. [Krótki opis drugiego zdjęcia - np. "Zbliżenie na strefę nauki z biurkiem"]
3. [Krótki opis trzeciego zdjęcia]
4. [Krótki opis czwartego zdjęcia]

**Struktura:**
1. Treść posta (kompletna, bez skrótów)
2. Separator: ---
3. Sekcja: ## SUGEROWANA KOLEJNOŚĆ ZDJĘĆ:
4. Lista ponumerowana z opisami każdego zdjęcia"""

# loads, saves and assembles the prompts sent to the model
class PromptManager:
    def __init__(self, prompts_dir: Optional[Union[str, Path]] = None):
        self.prompts_dir = Path(prompts_dir) if prompts_dir else Path(settings.PROMPTS_DIR)

    def get_available_prompts(self) -> List[PromptInfo]:
        """Get all available prompts"""
        return [
            PromptInfo(
                filename="fb-ig.txt",
                post_type=PostType.FB_IG,
                title="Facebook / Instagram",
                description="Post na fanpage z emocjonalnym storytellingiem"
            ),
            PromptInfo(
                filename="fb-group.txt",
                post_type=PostType.FB_GROUP,
                title="Grupa Facebook",
                description='Cykl "Mroomy Rozwiązuje" - merytoryczny case study'
            ),
        ]

    def is_known_prompt(self, filename: str) -> bool:
        return any(prompt.filename == filename for prompt in self.get_available_prompts())

    # only listed templates may be read or written
    def _prompt_path(self, filename: str) -> Path:
        if not self.is_known_prompt(filename):
            raise PromptError(f"Unknown prompt: {filename}")
        return self.prompts_dir / filename

    def load_prompt(self, filename: str) -> str:
        """Load a prompt from file"""
        file_path = self._prompt_path(filename)

        try:
            return file_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Error reading prompt {file_path}: {str(e)}")
            raise PromptError(f"Failed to load prompt: {filename}")

    def save_prompt(self, filename: str, content: str) -> None:
        """Save a prompt to file"""
        file_path = self._prompt_path(filename)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
            logger.info(f"✓ Prompt saved: {file_path}")
        except OSError as e:
            logger.error(f"Error writing prompt {file_path}: {str(e)}")
            raise PromptError(f"Failed to save prompt: {filename}")

    def load_prompt_by_type(self, post_type: PostType) -> str:
        return self.load_prompt(f"{PostType(post_type).value}.txt")

    # combines the post type template with project type information
    def build_system_prompt(self, post_type: PostType, project_type: ProjectType) -> str:
        """Build complete system prompt for post generation"""
        base_prompt = self.load_prompt_by_type(post_type)
        project_context = get_project_type_context(project_type)
        return f"{base_prompt}\n\n---\n\n{project_context}"

    def build_user_prompt(self, project_type: ProjectType) -> str:
        """Build user prompt with the required answer format"""
        return USER_PROMPT_TEMPLATE.format(project_name=get_project_type_name(project_type))

def get_project_type_context(project_type: ProjectType) -> str:
    return PROJECT_TYPE_CONTEXT[ProjectType(project_type)]

def get_project_type_name(project_type: ProjectType) -> str:
    return PROJECT_TYPE_NAMES[ProjectType(project_type)]
