import contextlib
import logging

from application.services.simulation_service import SimulationService, validate_positive
from domain.exceptions.arbitrage import InvalidInputError, TelegramError
from domain.models.arbitrage import SimulationReport
from infrastructure.telegram import TelegramBotClient

logger = logging.getLogger(__name__)

BOT_COMMANDS = [
    {'command': 'cotap', 'description': 'Simula arbitragem (ex: /cotap 5000)'},
    {'command': 'setpicnic', 'description': 'Define o preço de venda da Picnic (ex: /setpicnic 5.28)'},
    {'command': 'help', 'description': 'Mostra esta mensagem de ajuda'},
]

HELP_TEXT = """*Bem-vindo ao Bot de Simulação de Arbitragem USDT/BRL!*

Você pode usar os comandos em um chat privado comigo ou em um grupo onde eu fui adicionado. A análise também é postada no canal {channel}.

*Comandos disponíveis:*
- `/cotap <valor>`: Simula a operação.
  _Exemplo: `/cotap 5000`_

- `/setpicnic <preço>`: Define o preço de venda do USDT na Picnic. O valor é temporário e volta ao padrão quando o servidor reinicia.
  _Exemplo: `/setpicnic 5.28`_

- `/help`: Mostra esta mensagem de ajuda."""

CRITICAL_ERROR_TEXT = (
    '❌ *Erro crítico na Simulação.*\n\n'
    'Ocorreu uma falha inesperada ao processar sua solicitação. Tente novamente mais tarde.'
)


def format_brl(value: float) -> str:
    """Format as pt-BR currency, e.g. R$ 5.000,00."""
    text = f'{abs(value):,.2f}'.replace(',', '_').replace('.', ',').replace('_', '.')
    sign = '-' if value < 0 else ''
    return f'{sign}R$ {text}'


def parse_number(text: str) -> float | None:
    """Parse user input, accepting a decimal comma (5,28 or 5.000,50)."""
    text = text.strip()
    if ',' in text:
        text = text.replace('.', '').replace(',', '.')
    try:
        return float(text)
    except ValueError:
        return None


def split_command(text: str) -> tuple[str, str]:
    parts = text.strip().split(maxsplit=1)
    if not parts or not parts[0].startswith('/'):
        return '', ''
    command = parts[0][1:].split('@', 1)[0].lower()
    return command, parts[1] if len(parts) > 1 else ''


def format_report(report: SimulationReport, bot_username: str | None = None) -> str:
    if not report.results:
        return 'Não foi possível obter os resultados da simulação. Tente novamente mais tarde.'

    lines = [
        f'*Simulação de Arbitragem para {format_brl(report.amount)}*',
        f'_Preço de venda Picnic: {format_brl(report.resale_price)}_',
        '',
    ]

    for result in report.results:
        name = result.exchange_name.value
        if not result.has_quote:
            lines.append(f'*{name}*')
            lines.append('  - 🟥 *Falha na Cotação:* nenhuma resposta utilizável da API.')
            lines.append('')
            continue

        profit_icon = '🟢' if result.profit > 0 else '🔴'
        lines.append(f'*{name}* ⭐️ *Melhor Opção*' if result.best else f'*{name}*')
        lines.append(f'  - Compra USDT por: {format_brl(result.buy_price)}')
        lines.append(f'  - USDT Recebido: {result.units_after_fee:.4f}')
        lines.append(
            f'  - Lucro/Prejuízo: {profit_icon} *{format_brl(result.profit)}* '
            f'({result.profit_percentage:.2f}%)'
        )
        lines.append('')

    if bot_username:
        lines.append(f'_Análise feita por @{bot_username}_')

    return '\n'.join(lines).rstrip()


class TelegramService:
    """Dispatches bot commands to the simulation service and replies through the Bot API."""

    def __init__(self, bot: TelegramBotClient, simulation_service: SimulationService, channel_id: str = ''):
        self.bot = bot
        self.simulation_service = simulation_service
        self.channel_id = channel_id

    async def handle_update(self, update: dict) -> None:
        message = update.get('message') or update.get('channel_post')
        if not isinstance(message, dict):
            return
        text = message.get('text')
        chat = message.get('chat')
        if not isinstance(text, str) or not text or not isinstance(chat, dict):
            return
        chat_id = chat.get('id')
        if not isinstance(chat_id, (int, str)) or isinstance(chat_id, bool):
            return

        command, argument = split_command(text)
        if command in ('start', 'help'):
            await self.bot.send_message(chat_id, HELP_TEXT.format(channel=self.channel_id or '-'))
        elif command == 'cotap':
            await self._handle_simulation(chat_id, argument)
        elif command == 'setpicnic':
            await self._handle_set_resale_price(chat_id, argument)

    async def _handle_simulation(self, chat_id: int | str, argument: str) -> None:
        if not argument:
            await self.bot.send_message(chat_id, 'Comando inválido. Use o formato: `/cotap <valor>`')
            return
        try:
            amount = validate_positive(parse_number(argument), 'Amount')
        except InvalidInputError:
            await self.bot.send_message(chat_id, 'Valor inválido. Use, por exemplo: `/cotap 5000`')
            return

        await self.bot.send_message(
            chat_id, f'🔍 Analisando cotações para *{format_brl(amount)}*... Por favor, aguarde.'
        )

        try:
            report = await self.simulation_service.run(amount)
            text = format_report(report, await self._bot_username())
        except Exception as e:
            logger.error(f'Error while processing /cotap: {e}', exc_info=True)
            await self.bot.send_message(chat_id, CRITICAL_ERROR_TEXT)
            return

        await self.bot.send_message(chat_id, text)

        if report.has_any_quote and self.channel_id:
            await self._post_to_channel(chat_id, text)

    async def _handle_set_resale_price(self, chat_id: int | str, argument: str) -> None:
        if not argument:
            await self.bot.send_message(chat_id, 'Comando inválido. Use o formato: `/setpicnic <preço>`')
            return
        try:
            price = self.simulation_service.set_resale_price(parse_number(argument))
        except InvalidInputError:
            await self.bot.send_message(chat_id, 'Preço inválido. Use, por exemplo: `/setpicnic 5.28`')
            return

        await self.bot.send_message(
            chat_id,
            f'✅ Preço de venda na Picnic *temporariamente* atualizado para *{format_brl(price)}*.',
        )

    async def _post_to_channel(self, chat_id: int | str, text: str) -> None:
        try:
            channel = await self.bot.get_chat(self.channel_id)
        except TelegramError as e:
            logger.warning(f'Could not resolve channel {self.channel_id}: {e}')
            return
        if str(chat_id) == str(channel.get('id')):
            return
        await self.bot.send_message(self.channel_id, text)

    async def _bot_username(self) -> str | None:
        with contextlib.suppress(TelegramError):
            me = await self.bot.get_me()
            return me.get('username')
        return None

    async def setup_webhook(self, public_url: str) -> str:
        url = f"{public_url.rstrip('/')}/api/telegram/webhook"
        await self.bot.set_webhook(url)
        await self.bot.set_my_commands(BOT_COMMANDS)
        logger.info(f'Telegram webhook registered at {url}')
        return url
