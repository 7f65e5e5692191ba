# apps/core/forms.py

from typing import Dict, Type

from django import forms
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from .exceptions import ValidationError
from .models import User


class AccountCreationForm(UserCreationForm):
    """Formulário do admin para criar conta (email no lugar de username)"""

    class Meta:
        model = User
        fields = ('email', 'name')


class AccountChangeForm(UserChangeForm):
    """Formulário do admin para editar conta"""

    class Meta:
        model = User
        fields = ('email', 'name', 'avatar', 'is_verified', 'verification_token')


class JsonCharField(forms.CharField):
    """
    CharField para payload JSON

    O CharField do Django converte qualquer valor com str(); aqui número,
    lista ou objeto no lugar de texto é erro de validação.
    """

    default_error_messages = {
        'invalid': 'Must be a string.',
    }

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, str):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


# === PAYLOADS DA API DE CONTA ===
# Campos opcionais: presença e formato do email são checados no serviço,
# que devolve as mensagens da API ('Missing required fields', ...)

class SignupForm(forms.Form):
    email = JsonCharField(max_length=254, required=False)
    password = JsonCharField(max_length=128, required=False, strip=False)
    name = JsonCharField(max_length=150, required=False)


class LoginForm(forms.Form):
    email = JsonCharField(max_length=254, required=False)
    password = JsonCharField(max_length=128, required=False, strip=False)


class ResendVerificationForm(forms.Form):
    email = JsonCharField(max_length=254, required=False)


class ProfileForm(forms.Form):
    name = JsonCharField(max_length=150, required=False)
    email = JsonCharField(max_length=254, required=False)
    password = JsonCharField(max_length=128, required=False, strip=False)


def validate_payload(form_class: Type[forms.Form], data: Dict, partial: bool = False) -> Dict:
    """
    Valida um payload JSON com um Form do Django

    Com partial=True (PATCH) só as chaves presentes no payload são
    validadas e devolvidas; as demais ficam intocadas no registro.

    Raises:
        ValidationError: com a primeira mensagem de erro do formulário
    """
    form = form_class(data=data)

    if partial:
        for name, field in form.fields.items():
            field.required = False

    if not form.is_valid():
        campo, erros = next(iter(form.errors.items()))
        mensagem = erros[0]
        if campo != '__all__':
            mensagem = f"{campo}: {mensagem}"
        raise ValidationError(mensagem)

    if partial:
        return {name: value for name, value in form.cleaned_data.items() if name in data}
    return form.cleaned_data
