# apps/board/forms.py

"""
Formulários de validação dos payloads JSON do Kanban

Usados com apps.core.forms.validate_payload; em PATCH os campos viram
opcionais, mas um nome/título enviado vazio continua sendo rejeitado.
"""

from django import forms

from apps.core.forms import JsonCharField


class _NonBlankWhenSent:
    """Rejeita string vazia para os campos listados quando vierem no payload"""

    non_blank_fields = ()

    def clean(self):
        cleaned = super().clean()
        for campo in self.non_blank_fields:
            if campo in self.errors:
                continue
            if campo in self.data and not (cleaned.get(campo) or '').strip():
                self.add_error(campo, 'This field is required.')
        return cleaned


class BoardForm(_NonBlankWhenSent, forms.Form):
    non_blank_fields = ('name',)

    name = JsonCharField(max_length=200)
    icon = JsonCharField(max_length=200, required=False)
    background = JsonCharField(max_length=500, required=False, empty_value=None)


class ColumnForm(_NonBlankWhenSent, forms.Form):
    non_blank_fields = ('name',)

    name = JsonCharField(max_length=100)


class CardForm(_NonBlankWhenSent, forms.Form):
    non_blank_fields = ('title',)

    title = JsonCharField(max_length=200)
    description = JsonCharField(required=False, strip=False)
    labelColor = JsonCharField(max_length=32, required=False)
    deadline = JsonCharField(max_length=32, required=False)


def card_changes(cleaned):
    """Converte as chaves camelCase do frontend para os campos do modelo"""
    changes = dict(cleaned)
    if 'labelColor' in changes:
        changes['label_color'] = changes.pop('labelColor')
    return changes


class MoveCardForm(forms.Form):
    position = forms.IntegerField(required=False, min_value=0)
