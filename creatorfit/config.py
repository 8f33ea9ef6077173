"""
Centralized configuration: env vars, consent text, lifecycle constants.
"""
import hashlib
import os


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Redis ─────────────────────────────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── Database ──────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── Web ───────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')
BASE_URL = os.getenv('BASE_URL', 'http://localhost:8080')
PORT = int(os.getenv('PORT', '8080'))

# ── Auth ─────────────────────────────────────────────────────────────────────
ADMIN_TOKEN = os.getenv('ADMIN_TOKEN')

# ── Meta (Instagram login) ───────────────────────────────────────────────────
META_CLIENT_ID = os.getenv('META_CLIENT_ID')
META_CLIENT_SECRET = os.getenv('META_CLIENT_SECRET')
META_REDIRECT_URI = os.getenv('META_REDIRECT_URI')
META_GRAPH_VERSION = os.getenv('META_GRAPH_VERSION', 'v19.0')
META_SCOPES = [s.strip() for s in os.getenv('META_SCOPES', 'public_profile').split(',') if s.strip()]
META_TIMEOUT = int(os.getenv('META_TIMEOUT', '15'))
OAUTH_STATE_TTL = int(os.getenv('OAUTH_STATE_TTL', '600'))

# ── Token encryption ─────────────────────────────────────────────────────────
TOKEN_ENCRYPTION_KEY = os.getenv('TOKEN_ENCRYPTION_KEY', '')

# ── Qualification ────────────────────────────────────────────────────────────
# Demo mode fills missing follower/engagement/content signals with stand-in
# numbers until real collectors are wired in.
QUALIFICATION_DEMO_MODE = _env_flag('QUALIFICATION_DEMO_MODE', True)
NICHE_TAXONOMY_PATH = os.getenv('NICHE_TAXONOMY_PATH')

NICHE_MODEL_VERSION = 'dict-v1'
SCORING_VERSION = 'score-v1'

# ── Creator lifecycle ────────────────────────────────────────────────────────
CREATOR_STATUSES = [
    'lead',
    'connected',
    'qualified',
    'share_enabled',
    'revoked',
]

SUPPORTED_COUNTRIES = ('ES', 'PT')

CONSENT_TYPES = ('metrics_check', 'share_with_brands', 'marketing_contact')

# ── Consent text (versioned; hash stored with every consent row) ─────────────
CONSENT_VERSION = 'v1.0-2026-01-31'
CONSENT_TEXT = (
    'Ao conectar seu Instagram por login oficial, você autoriza a coleta e análise de '
    'métricas e informações do seu perfil, apenas na medida necessária, para: '
    '(1) validar autenticidade, (2) gerar o Creator Fit Score, (3) criar seu Media Kit e '
    '(4) recomendar categorias de marcas compatíveis. Não acessamos mensagens privadas. '
    'Você pode desconectar a conta e revogar esta autorização a qualquer momento.'
)
CONSENT_HASH = hashlib.sha256(CONSENT_TEXT.encode('utf-8')).hexdigest()
