from django import forms


class ProfileForm(forms.Form):
    name = forms.CharField(max_length=150)
    email = forms.EmailField()
    license_number = forms.CharField(max_length=64, required=False)
    institution_name = forms.CharField(max_length=255, required=False)
    institution_address = forms.CharField(max_length=255, required=False)
    institution_phone = forms.CharField(max_length=32, required=False)
    current_password = forms.CharField(required=False, widget=forms.PasswordInput)
    new_password = forms.CharField(required=False, min_length=6, widget=forms.PasswordInput)
    confirm_password = forms.CharField(required=False, widget=forms.PasswordInput)

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('new_password') and cleaned.get('new_password') != cleaned.get('confirm_password'):
            self.add_error('confirm_password', 'New passwords do not match')
        return cleaned

    @classmethod
    def from_profile(cls, profile: dict) -> 'ProfileForm':
        return cls(initial={
            'name': profile.get('name', ''),
            'email': profile.get('email', ''),
            'license_number': profile.get('licenseNumber', ''),
            'institution_name': profile.get('institutionName', ''),
            'institution_address': profile.get('institutionAddress', ''),
            'institution_phone': profile.get('institutionPhone', ''),
        })
