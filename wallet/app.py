"""Family Wallet GUI application using NiceGUI."""

import datetime as dt
from typing import Optional

import plotly.graph_objects as go
from nicegui import events, ui

from wallet.config import settings
from wallet.errors import CorruptStorageError, InvalidAmountError
from wallet.formatting import format_money
from wallet.logging_setup import get_logger
from wallet.models import Category, PaymentMode, TransactionType
from wallet.services import (
    LedgerStats,
    LedgerView,
    SortOrder,
    TransactionPipeline,
    TransactionQuery,
    TransactionService,
    TransactionStore,
    TypeFilter,
    create_store,
)
from wallet.services.transaction_service import EXPORT_MEDIA_TYPE

logger = get_logger(__name__)

EMPTY_MESSAGE = "No transactions yet. Add one above ✅"

TYPE_OPTIONS = {t.value: t.value.title() for t in TransactionType}
CATEGORY_OPTIONS = {c.value: c.label for c in Category}
MODE_OPTIONS = {m.value: m.label for m in PaymentMode}
FILTER_OPTIONS = {
    TypeFilter.ALL.value: "All",
    TypeFilter.CREDIT.value: "Credit",
    TypeFilter.DEBIT.value: "Debit",
    TypeFilter.SUSPICIOUS.value: "Suspicious",
}
SORT_OPTIONS = {
    SortOrder.NONE.value: "Default",
    SortOrder.LATEST.value: "Latest",
    SortOrder.AMOUNT_HIGH.value: "Amount: High → Low",
    SortOrder.AMOUNT_LOW.value: "Amount: Low → High",
}

COLUMNS = [
    {'name': 'date', 'label': 'Date', 'field': 'date', 'align': 'left'},
    {'name': 'merchant', 'label': 'Merchant', 'field': 'merchant', 'align': 'left'},
    {'name': 'category', 'label': 'Category', 'field': 'category', 'align': 'left'},
    {'name': 'mode', 'label': 'Mode', 'field': 'mode', 'align': 'left'},
    {'name': 'type', 'label': 'Type', 'field': 'type', 'align': 'left'},
    {'name': 'amount', 'label': 'Amount', 'field': 'amount', 'align': 'right'},
    {'name': 'status', 'label': 'Status', 'field': 'suspicious', 'align': 'left'},
    {'name': 'actions', 'label': '', 'field': 'id', 'align': 'right'},
]


class App:
    """Main application frontend using NiceGUI."""

    def __init__(self, store: Optional[TransactionStore] = None):
        """Initialize the application."""
        self.store = store or create_store(settings)

        # Initialize services
        self.transaction_service = TransactionService(self.store)
        self.pipeline = TransactionPipeline(self.store)

        # UI State
        self.query = TransactionQuery()

        # Build UI
        self._setup_styles()
        self._build_ui()
        self.refresh_all()

    def _setup_styles(self):
        """Setup custom styles and colors."""
        ui.colors(primary='#38bdf8', secondary='#0ea5e9', accent='#0369a1')
        ui.query('body').style('background-color: #0f172a; color: #f8fafc;')

    def _build_ui(self):
        """Construct the layout."""
        with ui.header().classes('items-center justify-between bg-slate-900 border-b border-slate-700'):
            ui.label(settings.app_title).classes('text-2xl font-bold text-sky-400')
            with ui.row().classes('items-center gap-4'):
                ui.button('Export', on_click=self._export, icon='download').props('flat color=white').mark('export')
                ui.button('Reset', on_click=self._confirm_reset, icon='delete_forever').props('flat color=red').mark('reset')

        with ui.column().classes('w-full p-4 gap-6'):
            self._build_stats()
            with ui.row().classes('w-full gap-4 items-stretch'):
                self._build_form()
                self._build_chart()
            self._build_transactions()

        self._build_dialogs()

    def _build_stats(self):
        with ui.row().classes('w-full gap-4'):
            self.balance_card = self._stat_card('Balance', format_money(0), 'sky-400')
            self.credit_card = self._stat_card('Total Credit', format_money(0), 'green-400')
            self.debit_card = self._stat_card('Total Debit', format_money(0), 'red-400')

    def _stat_card(self, title: str, value: str, color: str):
        with ui.card().classes('grow p-6 bg-slate-800 border border-slate-700 items-center justify-center') as card:
            ui.label(title).classes('text-slate-400 uppercase text-xs tracking-wider')
            card.value_label = ui.label(value).classes(f'text-3xl font-bold text-{color}')
        return card

    def _build_form(self):
        """Build the add-transaction form."""
        with ui.card().classes('grow p-6 bg-slate-800 border border-slate-700'):
            ui.label('Add Transaction').classes('text-lg font-bold mb-2')
            with ui.grid(columns=3).classes('w-full gap-4'):
                self.type_input = ui.select(TYPE_OPTIONS, label='Type', value=TransactionType.CREDIT.value)
                self.amount_input = ui.number('Amount', min=0, format='%.2f')
                self.merchant_input = ui.input('Merchant', placeholder='e.g. Amazon')
                self.category_input = ui.select(CATEGORY_OPTIONS, label='Category', value=Category.FOOD.value)
                self.date_input = ui.input('Date', value=dt.date.today().isoformat()).props('type=date')
                self.mode_input = ui.select(MODE_OPTIONS, label='Mode', value=PaymentMode.CASH.value)
            with ui.row().classes('w-full justify-end mt-4'):
                ui.button('Add', on_click=self._submit, icon='add').mark('add')

    def _build_chart(self):
        with ui.card().classes('p-4 bg-slate-800 border border-slate-700 w-96'):
            ui.label('Spending by Category').classes('text-lg font-bold mb-2')
            self.pie_chart = ui.plotly(go.Figure()).classes('w-full h-64')

    def _build_transactions(self):
        """Build the transactions table section."""
        with ui.column().classes('w-full grow'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.row().classes('items-baseline gap-3'):
                    ui.label('Transactions').classes('text-2xl font-bold')
                    self.count_label = ui.label().classes('text-slate-400')
                with ui.row().classes('gap-2 items-center'):
                    self.search_input = ui.input('Search', on_change=self._on_search).props('clearable').classes('w-64')
                    self.filter_input = ui.select(FILTER_OPTIONS, label='Show', value=TypeFilter.ALL.value, on_change=self._on_filter).classes('w-40')
                    self.sort_input = ui.select(SORT_OPTIONS, label='Sort', value=SortOrder.NONE.value, on_change=self._on_sort).classes('w-48')

            self.table = ui.table(columns=COLUMNS, rows=[], row_key='id', pagination=20).classes('w-full').mark('transactions')
            self.table.props(f'no-data-label="{EMPTY_MESSAGE}"')
            self.table.add_slot('body-cell-type', '''
                <q-td :props="props">
                    <span class="font-extrabold" :style="{color: props.row.type === 'credit' ? '#58ffb5' : '#ff6a6a'}">
                        {{ props.row.type.toUpperCase() }}
                    </span>
                </q-td>
            ''')
            self.table.add_slot('body-cell-amount', '''
                <q-td :props="props" class="font-extrabold">{{ props.row.amount_display }}</q-td>
            ''')
            self.table.add_slot('body-cell-status', '''
                <q-td :props="props">
                    <q-badge :color="props.row.suspicious ? 'negative' : 'positive'"
                             :label="props.row.suspicious ? 'Suspicious' : 'OK'" />
                </q-td>
            ''')
            self.table.add_slot('body-cell-actions', '''
                <q-td :props="props">
                    <q-btn flat dense color="negative" label="Delete" @click="$parent.$emit('delete', props.row)" />
                </q-td>
            ''')
            self.table.on('delete', self._on_delete)

    def _build_dialogs(self):
        """Alert and reset-confirmation dialogs, reused for the whole session."""
        with ui.dialog().props('persistent') as self.alert_dialog, ui.card():
            self.alert_label = ui.label().classes('text-lg')
            with ui.row().classes('w-full justify-end'):
                ui.button('OK', on_click=self.alert_dialog.close).mark('alert-ok')

        with ui.dialog() as self.reset_dialog, ui.card():
            ui.label('Reset all transactions?').classes('text-lg')
            with ui.row().classes('w-full justify-end'):
                ui.button('Cancel', on_click=self.reset_dialog.close).props('flat').mark('reset-cancel')
                ui.button('Reset', color='red', on_click=self._perform_reset).mark('reset-confirm')

    # Logic Methods
    def _submit(self):
        """Validate the form and append a transaction."""
        try:
            date = dt.date.fromisoformat(self.date_input.value) if self.date_input.value else None
            self.transaction_service.add_transaction(
                type=self.type_input.value,
                amount=self.amount_input.value,
                merchant=self.merchant_input.value or '',
                category=self.category_input.value,
                date=date,
                mode=self.mode_input.value,
            )
        except InvalidAmountError:
            self._alert('Enter valid amount.')
            return
        except CorruptStorageError as ex:
            logger.warning("Add refused: %s", ex)
            ui.notify(f'Cannot save: {ex}', type='negative')
            return

        self._reset_form()
        self.refresh_all()

    def _reset_form(self):
        self.type_input.value = TransactionType.CREDIT.value
        self.amount_input.value = None
        self.merchant_input.value = ''
        self.category_input.value = Category.FOOD.value
        self.date_input.value = dt.date.today().isoformat()
        self.mode_input.value = PaymentMode.CASH.value

    def _alert(self, message: str):
        """Blocking message dialog."""
        self.alert_label.set_text(message)
        self.alert_dialog.open()

    def _on_delete(self, e: events.GenericEventArguments):
        try:
            self.transaction_service.delete_transaction(e.args['id'])
        except CorruptStorageError as ex:
            logger.warning("Delete refused: %s", ex)
            ui.notify(f'Cannot delete: {ex}', type='negative')
            return
        self.refresh_all()

    def _on_search(self, e: events.ValueChangeEventArguments):
        self.query.search_text = e.value or ''
        self.refresh_all()

    def _on_filter(self, e: events.ValueChangeEventArguments):
        self.query.type_filter = TypeFilter(e.value)
        self.refresh_all()

    def _on_sort(self, e: events.ValueChangeEventArguments):
        self.query.sort_by = SortOrder(e.value)
        self.refresh_all()

    def _confirm_reset(self):
        self.reset_dialog.open()

    def _perform_reset(self):
        self.transaction_service.reset()
        self.reset_dialog.close()
        ui.notify('All transactions cleared')
        self.refresh_all()

    def _export(self):
        """Download the full stored collection, not the filtered view."""
        try:
            content = self.transaction_service.export_transactions()
        except CorruptStorageError as ex:
            ui.notify(f'Cannot export: {ex}', type='negative')
            return
        ui.download.content(content.encode('utf-8'), settings.export_filename, media_type=EXPORT_MEDIA_TYPE)

    def _load_view(self) -> LedgerView:
        try:
            return self.pipeline.process(self.query)
        except CorruptStorageError as ex:
            logger.warning("Rendering empty ledger: %s", ex)
            ui.notify(f'{ex}. Reset to start over.', type='warning')
            return LedgerView(rows=[], stats=LedgerStats(), spending_by_category={}, total_count=0)

    def refresh_all(self):
        """Re-read storage and refresh every view."""
        view = self._load_view()
        self._update_stats(view.stats)
        self._update_table(view)
        self._update_chart(view.spending_by_category)

    def _update_stats(self, stats: LedgerStats):
        self.balance_card.value_label.set_text(format_money(stats.balance))
        self.credit_card.value_label.set_text(format_money(stats.credit))
        self.debit_card.value_label.set_text(format_money(stats.debit))

    def _update_table(self, view: LedgerView):
        self.table.rows = [
            {
                'id': t.id,
                'date': t.date.isoformat(),
                'merchant': t.merchant,
                'category': t.category.label,
                'mode': t.mode.label,
                'type': t.type.value,
                'amount': t.amount,
                'amount_display': format_money(t.amount),
                'suspicious': t.suspicious,
            }
            for t in view.rows
        ]
        self.table.update()
        self.count_label.set_text(f'Showing {len(view.rows)} of {view.total_count}')

    def _update_chart(self, spending: dict[str, float]):
        fig = go.Figure(data=[go.Pie(labels=list(spending), values=list(spending.values()), hole=.4)])
        fig.update_layout(
            margin=dict(t=0, b=0, l=0, r=0),
            paper_bgcolor='rgba(0,0,0,0)',
            plot_bgcolor='rgba(0,0,0,0)',
            font=dict(color='#f8fafc'),
            showlegend=True
        )
        self.pie_chart.update_figure(fig)
